"""Tests for SQLite persistence of jobs and intervals."""

import pytest

from core.database import (
    PersistenceError,
    fetch_job_intervals,
    fetch_jobs,
    get_connection,
    init_schema,
    insert_job,
)
from core.intervals import Interval


def _insert(conn, job_date, intervals, username="anisa", **kwargs):
    fields = {
        "house_number": "12",
        "extras": None,
        "overtime": 0.0,
        "travel_time": 0.0,
    }
    fields.update(kwargs)
    return insert_job(
        conn, username=username, job_date=job_date, intervals=intervals, **fields
    )


def test_insert_and_fetch(conn):
    job_id = _insert(
        conn,
        "2024-01-05",
        [Interval("08:00", "12:00", 4.0), Interval("13:00", "17:30", 4.5)],
        overtime=1.5,
        travel_time=0.75,
    )

    jobs = fetch_jobs(conn, "anisa")
    assert len(jobs) == 1
    assert jobs[0]["id"] == job_id
    assert jobs[0]["date"] == "2024-01-05"
    assert jobs[0]["overtime"] == 1.5
    assert jobs[0]["travel_time"] == 0.75

    times = fetch_job_intervals(conn, job_id)
    assert [(t["start_time"], t["end_time"], t["duration"]) for t in times] == [
        ("08:00", "12:00", 4.0),
        ("13:00", "17:30", 4.5),
    ]


def test_decimals_stored_with_two_places(conn):
    job_id = _insert(conn, "2024-01-05", [Interval("08:00", "08:20", 20 / 60)], overtime=1 / 3)

    assert fetch_job_intervals(conn, job_id)[0]["duration"] == 0.33
    assert fetch_jobs(conn, "anisa")[0]["overtime"] == 0.33


def test_jobs_ordered_by_date_and_filtered_by_user(conn):
    _insert(conn, "2024-02-01", [])
    _insert(conn, "2024-01-20", [])
    _insert(conn, "2024-01-05", [])
    _insert(conn, "2024-01-10", [], username="ben")

    assert [j["date"] for j in fetch_jobs(conn, "anisa")] == [
        "2024-01-05",
        "2024-01-20",
        "2024-02-01",
    ]
    assert [j["date"] for j in fetch_jobs(conn, "ben")] == ["2024-01-10"]
    assert fetch_jobs(conn, "nobody") == []


def test_failed_interval_insert_rolls_back_job(conn):
    broken = Interval(start="08:00", end=None, duration=1.0)

    with pytest.raises(PersistenceError):
        _insert(conn, "2024-01-05", [Interval("07:00", "08:00", 1.0), broken])

    assert conn.execute("SELECT COUNT(*) FROM jobs").fetchone()[0] == 0
    assert conn.execute("SELECT COUNT(*) FROM job_times").fetchone()[0] == 0


def test_closed_connection_raises_persistence_error(conn):
    conn.close()
    with pytest.raises(PersistenceError):
        fetch_jobs(conn, "anisa")


def test_unusable_database_directory_raises_persistence_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")

    with pytest.raises(PersistenceError):
        get_connection(blocker / "timelog.db")


def test_init_schema_is_repeatable(conn):
    init_schema(conn)
    init_schema(conn)
    tables = {
        row["name"]
        for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    }
    assert {"jobs", "job_times", "api_requests", "api_request_details"} <= tables
