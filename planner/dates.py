"""
Calendar arithmetic for review scheduling.

Every value is treated as a plain calendar date. Strings must be ISO
``YYYY-MM-DD``; ``datetime`` values contribute their own (local) date. Where a
point in time is needed, for example to derive the weekday, the date is
anchored at local noon so that no timezone or DST shift can move it to a
neighbouring day.
"""
from datetime import date, datetime, time, timedelta
from typing import Union

from planner.exceptions import InvalidDateFormat

DateLike = Union[date, datetime, str]

DATE_FORMAT = "%Y-%m-%d"
NOON = time(12, 0, 0)


def parse_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string."""
    if not isinstance(value, str) or len(value.strip()) != 10:
        raise InvalidDateFormat(value)
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        raise InvalidDateFormat(value) from None


def to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(value)


def format_date(value: DateLike) -> str:
    """Format as ``YYYY-MM-DD``."""
    return to_date(value).strftime(DATE_FORMAT)


def at_local_noon(value: DateLike) -> datetime:
    return datetime.combine(to_date(value), NOON)


def add_days(value: DateLike, days: int) -> date:
    """Calendar day ``value + days``."""
    return to_date(value) + timedelta(days=days)


def day_of_week(value: DateLike) -> int:
    """Weekday index with 0 = Sunday, 6 = Saturday."""
    # isoweekday: Monday=1 .. Sunday=7
    return at_local_noon(value).isoweekday() % 7


def days_diff(start: DateLike, end: DateLike) -> int:
    """Whole days from ``start`` to ``end``; negative when ``end`` is earlier."""
    return (to_date(end) - to_date(start)).days


def date_range(start: DateLike, end: DateLike):
    """Yield every date from ``start`` to ``end`` inclusive."""
    current = to_date(start)
    last = to_date(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


def today() -> date:
    return date.today()
