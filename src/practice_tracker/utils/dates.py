"""
Calendar-date helpers shared by the consistency calendar and the challenge
tracker.

All arithmetic works on ``datetime.date`` values. The only place a clock and
a timezone are involved is :func:`today`; once a date has been taken, day
differences are plain calendar-day counts, so DST transitions and device
timezone changes cannot shift them.
"""

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from practice_tracker.exceptions import ValidationError


DATE_FORMAT = "%Y-%m-%d"

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

DAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Returns the current instant as an aware datetime
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def today(tz_name: str = "UTC", clock: Optional[Clock] = None) -> date:
    """Get today's calendar date in the given IANA timezone.

    Args:
        tz_name: Timezone name, e.g. "UTC" or "Asia/Kolkata"
        clock: Source of the current instant (defaults to the system clock)

    Returns:
        The local calendar date
    """
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {tz_name}", field="timezone")

    now = (clock or utc_now)()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(tz).date()


def parse_date(value: Union[str, date]) -> date:
    """Parse a YYYY-MM-DD string into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD", field="date")


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative if end is earlier)."""
    return (end - start).days


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def to_month_key(value: Union[date, Tuple[int, int]]) -> str:
    """Build a sortable YYYY-MM key from a date or a (year, month) pair."""
    if isinstance(value, date):
        year, month = value.year, value.month
    else:
        year, month = value
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}", field="month")
    return f"{year:04d}-{month:02d}"


def parse_month_key(key: str) -> Tuple[int, int]:
    """Split a YYYY-MM key into (year, month)."""
    try:
        year_str, month_str = key.split("-")
        if len(year_str) != 4 or len(month_str) != 2:
            raise ValueError(key)
        year, month = int(year_str), int(month_str)
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid month key {key!r}, expected YYYY-MM", field="month")
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month key {key!r}, expected YYYY-MM", field="month")
    return year, month


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by delta months, rolling the year over."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_dates(year: int, month: int) -> List[date]:
    """Every calendar date in the month, in order."""
    return [date(year, month, day) for day in range(1, days_in_month(year, month) + 1)]


def first_weekday_offset(year: int, month: int) -> int:
    """Blank cells before the 1st in a Sunday-first week grid."""
    # date.weekday(): Monday=0 ... Sunday=6
    return (date(year, month, 1).weekday() + 1) % 7


def month_label(year: int, month: int) -> str:
    """Human label such as "October 2026"."""
    return f"{MONTH_NAMES[month - 1]} {year}"


def weekday_initial(d: date) -> str:
    """Single-letter weekday, e.g. "M" for Monday."""
    return d.strftime("%a")[0]
