"""Date helpers shared by the analytics calculators."""

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ats_analytics.constants import SECONDS_PER_DAY

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def start_of_month(moment: datetime, months_back: int = 0) -> datetime:
    """First instant of the calendar month ``months_back`` months before ``moment``."""
    month_index = moment.year * 12 + (moment.month - 1) - months_back
    year, month = divmod(month_index, 12)
    return datetime(year, month + 1, 1, tzinfo=timezone.utc)


def end_of_month(moment: datetime) -> date:
    """Last calendar day of the month containing ``moment``."""
    next_month = start_of_month(moment, months_back=-1)
    return (next_month - timedelta(days=1)).date()


def days_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / SECONDS_PER_DAY


def in_window(value: Optional[datetime], start: datetime, end: datetime) -> bool:
    """True when ``value`` is present and falls inside ``[start, end]``."""
    return value is not None and start <= value <= end


def in_half_open(value: Optional[datetime], start: datetime, end: datetime) -> bool:
    """True when ``value`` is present and falls inside ``[start, end)``."""
    return value is not None and start <= value < end
