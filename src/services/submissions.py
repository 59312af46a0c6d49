"""
Saving a day's work: parse every interval first, then persist in one go.
"""

import sqlite3
from dataclasses import dataclass

from core.aggregation import hm_to_decimal
from core.database import insert_job
from core.intervals import Interval, parse_intervals


@dataclass
class SubmissionResult:
    """Outcome of a successful submission."""

    job_id: int
    intervals: list[Interval]
    total_hours: float  # raw sum of the parsed durations


def submit_job(
    conn: sqlite3.Connection,
    username: str,
    job_date: str,
    intervals_text: str | None,
    house_number: str | None = None,
    extras: str | None = None,
    overtime: str | None = None,
    travel_time: str | None = None,
) -> SubmissionResult:
    """
    Parse the interval text and store the job with all of its intervals.

    The whole batch is validated before anything is written, so a bad
    interval leaves the database untouched.

    Raises:
        FormatError: an interval, the overtime or the travel time is malformed
        PersistenceError: the database rejected the insert
    """
    intervals = parse_intervals(intervals_text)
    overtime_hours = hm_to_decimal(overtime)
    travel_hours = hm_to_decimal(travel_time)

    job_id = insert_job(
        conn,
        username=username,
        job_date=job_date,
        house_number=house_number,
        extras=extras,
        overtime=overtime_hours,
        travel_time=travel_hours,
        intervals=intervals,
    )

    total_hours = sum(interval.duration for interval in intervals)
    return SubmissionResult(job_id=job_id, intervals=intervals, total_hours=total_hours)
