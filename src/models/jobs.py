"""
Data models for jobs, their intervals and the monthly overview.

Stored rows are TypedDicts; the overview read model uses Pydantic so the
same objects feed the HTML pages, the JSON API and the Excel export.
"""

from datetime import date
from typing import TypedDict

from pydantic import BaseModel


class JobRow(TypedDict):
    """Row of the jobs table."""
    id: int
    username: str
    date: str  # YYYY-MM-DD
    house_number: str | None
    extras: str | None
    overtime: float
    travel_time: float


class IntervalRow(TypedDict):
    """Row of the job_times table."""
    id: int
    job_id: int
    start_time: str  # HH:MM
    end_time: str
    duration: float  # decimal hours, two places


class IntervalView(BaseModel):
    """One stored interval, ready for display."""

    start: str
    end: str
    duration: float
    minutes: int
    label: str | None  # e.g. "4 Std."


class JobView(BaseModel):
    """One job with its intervals and formatted totals."""

    id: int
    job_date: date
    date_label: str  # e.g. "Fr., 05.01.2024"
    house_number: str | None = None
    extras: str | None = None
    intervals: list[IntervalView] = []
    total_minutes: int = 0
    total_label: str | None = None
    overtime_label: str | None = None
    travel_label: str | None = None


class MonthView(BaseModel):
    """All jobs of one calendar month."""

    key: str  # YYYY-MM
    title: str  # e.g. "Januar 2024"
    jobs: list[JobView] = []
    total_minutes: int = 0
    total_label: str | None = None
