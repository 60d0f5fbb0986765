import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

# Day boundaries are always computed in UTC


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime"""
    return datetime.now(timezone.utc)

def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure datetime is in UTC timezone"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def to_naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """UTC wall-clock time without tzinfo, the form stored in the database"""
    if dt is None:
        return None
    return ensure_utc(dt).replace(tzinfo=None)

def start_of_day(value: Union[date, datetime]) -> datetime:
    """00:00:00.000000 UTC of the day containing value"""
    if isinstance(value, datetime):
        value = ensure_utc(value).date()
    return datetime.combine(value, time.min, tzinfo=timezone.utc)

def end_of_day(value: Union[date, datetime]) -> datetime:
    """23:59:59.999999 UTC of the day containing value"""
    if isinstance(value, datetime):
        value = ensure_utc(value).date()
    return datetime.combine(value, time.max, tzinfo=timezone.utc)

def subtract_months(dt: datetime, months: int) -> datetime:
    """Calendar month subtraction, clamping the day to the target month's length"""
    month_index = dt.month - 1 - months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)
