"""
Daily review capacity.

Capacity is measured in effort points: a day with capacity 5 holds five Easy
reviews but fewer than three Hard ones. The effective capacity for a date is
the user's base daily limit scaled by every multiplier that applies to it:

* heavy weekday (from the weekly pattern): x0.6
* pace mode: faster x1.2, slower x0.8
* a one-off day exception: x its capacity multiplier

Multipliers compose multiplicatively, so a heavy weekday that also carries a
heavy exception is reduced twice.
"""
from datetime import date
from typing import Dict, Iterable, Optional

from planner.config import settings as app_settings
from planner.dates import DateLike, day_of_week, to_date
from planner.enums import PaceMode

HEAVY_DAY_MULTIPLIER = 0.6
PACE_MULTIPLIERS: Dict[PaceMode, float] = {
    PaceMode.NORMAL: 1.0,
    PaceMode.FASTER: 1.2,
    PaceMode.SLOWER: 0.8,
}
MIN_CAPACITY_POINTS = 0.1


def daily_capacity(day: DateLike, user_settings, exceptions: Iterable = ()) -> float:
    """
    Effective capacity for ``day``.

    Args:
        day: the calendar date
        user_settings: object with ``daily_limit``, ``heavy_days`` and ``pace_mode``
        exceptions: day exceptions (objects with ``date`` and ``capacity_multiplier``)

    Returns:
        Capacity in effort points, never negative
    """
    day = to_date(day)
    multiplier = 1.0

    if day_of_week(day) in (user_settings.heavy_days or []):
        multiplier *= HEAVY_DAY_MULTIPLIER

    pace = PaceMode(user_settings.pace_mode or PaceMode.NORMAL)
    multiplier *= PACE_MULTIPLIERS[pace]

    for exception in exceptions:
        if to_date(exception.date) == day:
            multiplier *= exception.capacity_multiplier
            break

    return max(0.0, user_settings.daily_limit * multiplier)


class CapacityModel:
    """Capacity lookups for one user, with exceptions indexed by date."""

    def __init__(self, user_settings, exceptions: Iterable = (), slack: Optional[float] = None):
        self.user_settings = user_settings
        self.exceptions = {to_date(e.date): e for e in exceptions}
        self.slack = app_settings.capacity_slack if slack is None else slack
        self._cache: Dict[date, float] = {}

    def capacity(self, day: DateLike) -> float:
        day = to_date(day)
        if day not in self._cache:
            exception = self.exceptions.get(day)
            self._cache[day] = daily_capacity(
                day, self.user_settings, [exception] if exception is not None else []
            )
        return self._cache[day]

    def capacity_points(self, day: DateLike) -> float:
        """Capacity including the soft headroom used for placement"""
        return self.capacity(day) * self.slack

    def load_ratio(self, load: float, day: DateLike) -> float:
        return load / max(MIN_CAPACITY_POINTS, self.capacity_points(day))
