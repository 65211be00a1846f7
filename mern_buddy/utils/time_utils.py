"""Time helpers.

MongoDB hands back naive datetimes, so everything is kept as naive UTC.
"""
from datetime import date, datetime, time, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, truncated to what BSON stores (ms)."""
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def date_to_datetime(value: date) -> datetime:
    """Midnight of the given date (MongoDB has no date-only type)."""
    return datetime.combine(value, time.min)


def datetime_to_date(value: Optional[datetime | date]) -> Optional[date]:
    """Inverse of :func:`date_to_datetime`, passing dates and None through."""
    if isinstance(value, datetime):
        return value.date()
    return value
