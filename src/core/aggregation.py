"""
Duration totals per job and per month, and their hour/minute formatting.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from core.config import HOURS_LABEL, MAX_DECIMAL_HOURS, MINUTES_LABEL, REASON_INVALID_TIME
from core.intervals import FormatError


def interval_minutes(duration) -> int:
    """Decimal hours to whole minutes, half rounded up."""
    if not duration:
        return 0
    return math.floor(float(duration) * 60 + 0.5)


def job_total_minutes(durations: Iterable) -> int:
    """Sum of the per-interval rounded minutes (rounding happens per interval)."""
    return sum(interval_minutes(d) for d in durations)


def format_hm(total_minutes) -> str | None:
    """
    Format minutes as German hours/minutes text.

    90 -> "1 Std. 30 Min.", 45 -> "45 Min.", 120 -> "2 Std.", 0 -> None
    """
    if not total_minutes:
        return None
    hours, minutes = divmod(int(total_minutes), 60)
    text = ""
    if hours > 0:
        text += f"{hours} {HOURS_LABEL} "
    if minutes > 0:
        text += f"{minutes} {MINUTES_LABEL}"
    return text.strip()


def hm_to_decimal(value: str | None) -> float:
    """
    Convert "H:MM" (or a plain decimal like "1.5") to decimal hours.

    Empty input is 0. Missing minutes count as 0. The result must lie in
    0 <= hours < MAX_DECIMAL_HOURS.

    Raises:
        FormatError: if a part is not a number or the value is out of range
    """
    if not value or not value.strip():
        return 0.0
    parts = value.strip().split(":")
    try:
        hours = float(parts[0]) if parts[0].strip() else 0.0
        minutes = float(parts[1]) if len(parts) > 1 and parts[1].strip() else 0.0
    except ValueError:
        raise FormatError(value.strip(), REASON_INVALID_TIME)
    if not (math.isfinite(hours) and math.isfinite(minutes)) or minutes < 0:
        raise FormatError(value.strip(), REASON_INVALID_TIME)
    total = hours + minutes / 60
    if not 0 <= total < MAX_DECIMAL_HOURS:
        raise FormatError(value.strip(), REASON_INVALID_TIME)
    return total


# =============================================================================
# MONTH GROUPING
# =============================================================================


def month_key(d: date) -> str:
    """Locale-independent month key, e.g. '2024-01'."""
    return f"{d.year}-{d.month:02d}"


@dataclass
class MonthBucket:
    """Jobs of one calendar month, in retrieval order."""

    key: str
    jobs: list = field(default_factory=list)
    total_minutes: int = 0


def group_by_month(jobs: Iterable, date_of, minutes_of) -> list[MonthBucket]:
    """
    Group jobs by calendar month.

    Args:
        jobs: jobs ordered by date
        date_of: callable returning a job's date
        minutes_of: callable returning a job's total minutes

    Returns:
        Buckets in order of first appearance, each with its summed minutes
    """
    buckets: dict[str, MonthBucket] = {}
    for job in jobs:
        key = month_key(date_of(job))
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = MonthBucket(key=key)
        bucket.jobs.append(job)
        bucket.total_minutes += minutes_of(job)
    return list(buckets.values())
