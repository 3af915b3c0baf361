"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def add_months(value: datetime, months: int) -> datetime:
    """Shift a datetime by whole months, clamping the day to the target month's end"""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def whole_months_until(end: date, now: datetime) -> int:
    """Number of complete 30-day periods between now and end (0 if end has passed)"""
    end_dt = datetime(end.year, end.month, end.day, tzinfo=now.tzinfo)
    seconds = (end_dt - now).total_seconds()
    if seconds <= 0:
        return 0
    return int(seconds // (24 * 3600 * 30))
