"""
Monthly overview of a user's jobs, with German labels.
"""

import sqlite3
from datetime import date

from core.aggregation import (
    format_hm,
    group_by_month,
    interval_minutes,
    job_total_minutes,
)
from core.database import fetch_job_intervals, fetch_jobs
from models.jobs import IntervalView, JobRow, JobView, MonthView
from services.reports import format_job_date, format_month_title


def build_job_view(job: JobRow, interval_rows: list[dict]) -> JobView:
    """Combine a stored job with its stored intervals."""
    intervals = []
    for row in interval_rows:
        minutes = interval_minutes(row["duration"])
        intervals.append(
            IntervalView(
                start=row["start_time"],
                end=row["end_time"],
                duration=row["duration"],
                minutes=minutes,
                label=format_hm(minutes),
            )
        )

    total = job_total_minutes(row["duration"] for row in interval_rows)
    job_date = date.fromisoformat(job["date"])
    extras = job["extras"].strip() if job["extras"] and job["extras"].strip() else None

    return JobView(
        id=job["id"],
        job_date=job_date,
        date_label=format_job_date(job_date),
        house_number=job["house_number"],
        extras=extras,
        intervals=intervals,
        total_minutes=total,
        total_label=format_hm(total),
        overtime_label=format_hm(interval_minutes(job["overtime"])),
        travel_label=format_hm(interval_minutes(job["travel_time"])),
    )


def build_overview(
    conn: sqlite3.Connection, username: str, month: str | None = None
) -> list[MonthView]:
    """
    Load a user's jobs and group them by month.

    Args:
        conn: database connection
        username: owner of the jobs
        month: optional YYYY-MM filter

    Returns:
        Month views in ascending date order
    """
    jobs = [
        build_job_view(job, fetch_job_intervals(conn, job["id"]))
        for job in fetch_jobs(conn, username)
    ]

    months = []
    for bucket in group_by_month(
        jobs, date_of=lambda j: j.job_date, minutes_of=lambda j: j.total_minutes
    ):
        if month and bucket.key != month:
            continue
        months.append(
            MonthView(
                key=bucket.key,
                title=format_month_title(bucket.jobs[0].job_date),
                jobs=bucket.jobs,
                total_minutes=bucket.total_minutes,
                total_label=format_hm(bucket.total_minutes),
            )
        )
    return months
