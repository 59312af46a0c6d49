"""
SQLite database operations for jobs and their work intervals.
"""

import sqlite3
from pathlib import Path

from core.config import DB_PATH
from core.intervals import Interval
from models.jobs import IntervalRow, JobRow


class PersistenceError(Exception):
    """Any failure reported by the storage layer."""


SCHEMA = """
    CREATE TABLE IF NOT EXISTS jobs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT NOT NULL,
        date TEXT NOT NULL,
        house_number TEXT,
        extras TEXT,
        overtime REAL DEFAULT 0,
        travel_time REAL DEFAULT 0
    );

    CREATE TABLE IF NOT EXISTS job_times (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        job_id INTEGER NOT NULL,
        start_time TEXT NOT NULL,
        end_time TEXT NOT NULL,
        duration REAL NOT NULL,
        FOREIGN KEY (job_id) REFERENCES jobs(id)
    );

    CREATE TABLE IF NOT EXISTS api_requests (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        request_id TEXT UNIQUE NOT NULL,
        timestamp TEXT NOT NULL,
        endpoint TEXT NOT NULL,
        method TEXT NOT NULL,
        client_ip TEXT,
        username TEXT,
        status_code INTEGER NOT NULL,
        error_code TEXT,
        error_message TEXT,
        processing_time_ms INTEGER NOT NULL,
        intervals_parsed INTEGER,
        total_hours REAL
    );

    CREATE TABLE IF NOT EXISTS api_request_details (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        request_id TEXT NOT NULL,
        detail_type TEXT NOT NULL CHECK(detail_type IN ('validation_error', 'interval_saved', 'warning')),
        message TEXT NOT NULL,
        FOREIGN KEY (request_id) REFERENCES api_requests(request_id)
    );

    CREATE INDEX IF NOT EXISTS idx_jobs_username_date ON jobs(username, date);
    CREATE INDEX IF NOT EXISTS idx_job_times_job ON job_times(job_id);
    CREATE INDEX IF NOT EXISTS idx_api_requests_timestamp ON api_requests(timestamp);
"""


def get_connection(db_path: Path | None = None) -> sqlite3.Connection:
    """Get a database connection with dict-like rows and foreign keys enforced."""
    path = Path(db_path or DB_PATH)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
    except (sqlite3.Error, OSError) as e:
        raise PersistenceError(str(e)) from e
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create tables and indexes if they don't exist."""
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    except sqlite3.Error as e:
        raise PersistenceError(str(e)) from e


def insert_job(
    conn: sqlite3.Connection,
    username: str,
    job_date: str,
    house_number: str | None,
    extras: str | None,
    overtime: float,
    travel_time: float,
    intervals: list[Interval],
) -> int:
    """
    Insert one job and all of its intervals in a single transaction.

    Decimal values are stored rounded to two places. Nothing is committed
    if any insert fails.

    Returns:
        The new job id
    """
    try:
        with conn:
            cursor = conn.execute(
                """
                INSERT INTO jobs (username, date, house_number, extras, overtime, travel_time)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (username, job_date, house_number, extras, round(overtime, 2), round(travel_time, 2)),
            )
            job_id = cursor.lastrowid
            conn.executemany(
                """
                INSERT INTO job_times (job_id, start_time, end_time, duration)
                VALUES (?, ?, ?, ?)
                """,
                [(job_id, i.start, i.end, round(i.duration, 2)) for i in intervals],
            )
    except sqlite3.Error as e:
        raise PersistenceError(str(e)) from e
    return job_id


def fetch_jobs(conn: sqlite3.Connection, username: str) -> list[JobRow]:
    """All jobs of a user, ascending by date (then insertion order)."""
    try:
        rows = conn.execute(
            "SELECT * FROM jobs WHERE username = ? ORDER BY date, id",
            (username,),
        ).fetchall()
    except sqlite3.Error as e:
        raise PersistenceError(str(e)) from e
    return [dict(row) for row in rows]


def fetch_job_intervals(conn: sqlite3.Connection, job_id: int) -> list[IntervalRow]:
    """Intervals of one job in the order they were entered."""
    try:
        rows = conn.execute(
            "SELECT * FROM job_times WHERE job_id = ? ORDER BY id",
            (job_id,),
        ).fetchall()
    except sqlite3.Error as e:
        raise PersistenceError(str(e)) from e
    return [dict(row) for row in rows]
