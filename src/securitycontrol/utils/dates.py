"""Calendar month arithmetic for verification windows."""

from __future__ import annotations

import calendar
from datetime import datetime


def shift_months(value: datetime, months: int) -> datetime:
    """Move a datetime by whole calendar months.

    The day is clamped to the last day of the target month, so
    shifting 2024-08-31 back six months gives 2024-02-29.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def months_ago(now: datetime, months: int) -> datetime:
    return shift_months(now, -months)


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)
