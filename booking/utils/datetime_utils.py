"""
Date and time helpers shared by the scheduling services.
All values are naive and interpreted in the store's local time.
"""
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional, Union

from booking.core.exceptions import InvalidInputError

TIME_FORMAT = "%H:%M"


def to_date(value: Union[date, datetime]) -> date:
    """Strip the time-of-day from a datetime; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def day_start(day: date) -> datetime:
    return datetime.combine(day, time.min)


def iter_days(start_date: date, end_date: date) -> Iterator[date]:
    """Yield every calendar day in [start_date, end_date]."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    """
    Parse an "HH:MM" string into a time.

    Returns None for empty input.
    Raises InvalidInputError if the string is not a valid 24h time.
    """
    if value is None or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip(), TIME_FORMAT).time()
    except ValueError as e:
        raise InvalidInputError(f"Invalid time '{value}', expected HH:MM") from e


def format_hhmm(value: Union[time, datetime]) -> str:
    return value.strftime(TIME_FORMAT)


def minutes_between(start: Union[time, datetime], end: Union[time, datetime]) -> int:
    """Whole minutes from start to end; times of day are measured on the same day."""
    if isinstance(start, time):
        start = datetime.combine(date.min, start)
        end = datetime.combine(date.min, end)
    return int((end - start).total_seconds() // 60)
