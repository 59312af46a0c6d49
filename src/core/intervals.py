"""
Work interval tokenizing and parsing.

Turns free text such as "8-12; 13:00 bis 17.30" into validated intervals.
"""

import re
from dataclasses import dataclass

from core.config import (
    REASON_END_BEFORE_START,
    REASON_INVALID_FORMAT,
    REASON_INVALID_TIME,
    REASON_MESSAGES_DE,
    SEPARATOR_WORD,
)

# =============================================================================
# PATTERNS
# =============================================================================

# Lines and semicolons separate intervals
LINE_SPLIT_PATTERN = re.compile(r"\r?\n|;")

# A complete "time SEP time" expression, anchored where the scan checks it
INTERVAL_START_PATTERN = re.compile(
    r"\d{1,2}(?:[:.]\d{1,2})?\s*(?:bis|-|–)\s*\d{1,2}(?:[:.]\d{1,2})?",
    re.ASCII | re.IGNORECASE,
)

DASH_PATTERN = re.compile(r"\s*[-–]\s*")
SEPARATOR_PATTERN = re.compile(SEPARATOR_WORD, re.IGNORECASE)
TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$", re.ASCII)


# =============================================================================
# DATA CLASSES
# =============================================================================


class FormatError(ValueError):
    """Interval text that cannot be turned into a valid interval."""

    def __init__(self, token: str, reason: str):
        self.token = token
        self.reason = reason
        super().__init__(f"{reason}: {token}")

    @property
    def message_de(self) -> str:
        """Reason in German, as shown on the result page."""
        return f"{REASON_MESSAGES_DE.get(self.reason, self.reason)}: {self.token}"


@dataclass(frozen=True)
class Interval:
    """A single work period, start and end as zero-padded HH:MM."""

    start: str
    end: str
    duration: float  # decimal hours, exact


# =============================================================================
# TOKENIZING
# =============================================================================


def _split_segment(segment: str) -> list[str]:
    """
    Split one line at whitespace that directly precedes a complete interval.

    "8-12 13-17" -> ["8-12", "13-17"], while "8 bis 12" stays whole because
    no whitespace inside it is followed by another full interval.
    """
    tokens = []
    token_start = 0
    for pos, char in enumerate(segment):
        if pos == 0 or not char.isspace():
            continue
        if INTERVAL_START_PATTERN.match(segment, pos + 1):
            tokens.append(segment[token_start:pos])
            token_start = pos + 1
    tokens.append(segment[token_start:])
    return [t.strip() for t in tokens if t.strip()]


def tokenize(raw: str | None) -> list[str]:
    """Split raw interval text into unparsed interval strings, in input order."""
    if not raw:
        return []

    tokens = []
    for segment in LINE_SPLIT_PATTERN.split(raw):
        segment = segment.strip()
        if segment:
            tokens.extend(_split_segment(segment))
    return tokens


# =============================================================================
# PARSING
# =============================================================================


def _to_minutes(part: str, token: str) -> int:
    """Minutes since midnight for 'H:MM' / 'HH:MM'; bare hours get ':00'."""
    if ":" not in part:
        part += ":00"
    match = TIME_PATTERN.match(part)
    if not match:
        raise FormatError(token, REASON_INVALID_TIME)
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59:
        raise FormatError(token, REASON_INVALID_TIME)
    return hours * 60 + minutes


def format_time(total_minutes: int) -> str:
    """Render minutes since midnight as HH:MM."""
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


def parse_interval(token: str) -> Interval:
    """
    Parse one interval string.

    Accepts "8-12", "8.30 bis 12", "13:00 – 17:30" and similar.

    Raises:
        FormatError: invalid format, invalid time or end before start
    """
    line = token.replace(".", ":").strip()
    line = DASH_PATTERN.sub(f" {SEPARATOR_WORD} ", line)

    parts = [p.strip() for p in SEPARATOR_PATTERN.split(line)]
    if len(parts) != 2 or not all(parts):
        raise FormatError(token.strip(), REASON_INVALID_FORMAT)

    start = _to_minutes(parts[0], token.strip())
    end = _to_minutes(parts[1], token.strip())

    duration = (end - start) / 60
    if duration <= 0:
        raise FormatError(token.strip(), REASON_END_BEFORE_START)

    return Interval(start=format_time(start), end=format_time(end), duration=duration)


def parse_intervals(raw: str | None) -> list[Interval]:
    """Tokenize and parse everything; the first bad token aborts the batch."""
    return [parse_interval(token) for token in tokenize(raw)]
