from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a stored timestamp (datetime or ISO-8601 string).

    Returns None for anything that is not a valid instant, so callers can
    flag the row instead of failing.
    """

    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def wall_clock(value: datetime) -> datetime:
    """Drop tzinfo, keeping the wall-clock reading of the timestamp."""
    return value.replace(tzinfo=None)


def local_day(value: datetime) -> date:
    return value.date()


def start_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.min, tzinfo=value.tzinfo)


def end_of_day(value: datetime) -> datetime:
    """23:59:59.999 of the same calendar day (millisecond precision)."""
    return datetime.combine(value.date(), time(23, 59, 59, 999000), tzinfo=value.tzinfo)


def days_ago(days: int, from_date: datetime) -> datetime:
    return from_date - timedelta(days=days)


def start_of_month(value: datetime) -> datetime:
    return datetime.combine(value.date().replace(day=1), time.min, tzinfo=value.tzinfo)


def minute_of_day(value: datetime) -> int:
    """Minutes since midnight, seconds truncated."""
    return value.hour * 60 + value.minute


def comparable(left: datetime, right: datetime) -> tuple[datetime, datetime]:
    """Make two timestamps comparable.

    Two aware or two naive values compare as-is; a mixed pair is compared on
    wall-clock readings.
    """

    if (left.tzinfo is None) == (right.tzinfo is None):
        return left, right
    return wall_clock(left), wall_clock(right)
