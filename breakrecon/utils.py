from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Optional

from .models import TimeRange

TIME_FORMATS = ("%I:%M %p", "%I:%M%p", "%H:%M")
DATE_FORMATS = ("%m/%d/%Y", "%Y-%m-%d")

DOUBLE_BREAK_PHRASE = "30 and 15"
DOUBLE_BREAK_MINUTES = 45

DURATION_RE = re.compile(r"(\d+)\s*(minutes?|mins?)", re.IGNORECASE)
TIME_RANGE_RE = re.compile(
    r"(\d{1,2}:\d{2}\s*[ap]m)\s*-\s*(\d{1,2}:\d{2}\s*[ap]m)", re.IGNORECASE
)
ACTUAL_MINUTES_RE = re.compile(r"\((\d+)m\)")


def parse_time(value: Optional[str], reference_date: date) -> Optional[datetime]:
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    for fmt in TIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return datetime.combine(reference_date, parsed.time())
    return None


def parse_duration(value: Optional[str]) -> Optional[int]:
    if not value or not value.strip():
        return None
    if DOUBLE_BREAK_PHRASE in value:
        return DOUBLE_BREAK_MINUTES
    match = DURATION_RE.search(value)
    return int(match.group(1)) if match else None


def parse_time_range(value: Optional[str], reference_date: date) -> Optional[TimeRange]:
    if not value or not value.strip():
        return None
    range_match = TIME_RANGE_RE.search(value)
    if range_match is None:
        return None
    actual_match = ACTUAL_MINUTES_RE.search(value)
    return TimeRange(
        start=parse_time(range_match.group(1), reference_date),
        end=parse_time(range_match.group(2), reference_date),
        actual_minutes=int(actual_match.group(1)) if actual_match else None,
    )


def parse_csv_date(value: str) -> date:
    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date format: {value}")


def parse_hours(value: Optional[str]) -> float:
    if value is None:
        return 0.0
    try:
        hours = float(value.strip())
    except ValueError:
        return 0.0
    return hours if math.isfinite(hours) else 0.0


def minutes_between(start: datetime, end: datetime) -> int:
    # whole minutes, truncated toward zero
    return int((end - start).total_seconds() / 60)

