"""
Datetime utilities.

Provides timezone-aware datetime functions and calendar-month arithmetic.
"""

import calendar
from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)


def add_months(value: datetime, months: int) -> datetime:
    """
    Shift datetime by whole calendar months.

    The day is clamped to the last day of the target month, so
    Jan 31 + 1 month is Feb 28 (or 29).

    Args:
        value: Source datetime
        months: Number of months to add (may be negative)

    Returns:
        Shifted datetime with the same time and tzinfo
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def month_start(value: datetime) -> datetime:
    """Truncate datetime to midnight of the first day of its month."""
    return value.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
