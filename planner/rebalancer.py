"""
Capacity-aware placement of pending reviews.

Every pending review is scored, then placed greedily in score order onto the
first day of its window that still has room. Overdue and costly reviews score
highest, so they claim contended days first. A review that fits nowhere in its
window is placed on the relatively least-loaded day of a slightly wider range;
capacity is a soft target and no review is ever left unplaced.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Sequence

from loguru import logger

from planner.capacity import CapacityModel
from planner.dates import add_days, date_range, days_diff, to_date

OVERDUE_WEIGHT = 100
EFFORT_WEIGHT = 10
DUE_BONUS = 50
FALLBACK_EXTRA_DAYS = 2


@dataclass
class RebalanceResult:
    """Outcome of one rebalance pass"""
    placements: Dict[str, date] = field(default_factory=dict)  # review id -> chosen day
    moved: List[str] = field(default_factory=list)
    fallbacks: List[str] = field(default_factory=list)
    daily_load: Dict[date, float] = field(default_factory=dict)  # within the horizon
    order: List[str] = field(default_factory=list)  # processing order

    @property
    def moved_count(self) -> int:
        return len(self.moved)


def overdue_days(review, today: date) -> int:
    return max(0, days_diff(review.window_end, today))


def score_review(review, today: date) -> float:
    """Priority of a review; higher is placed first"""
    score = overdue_days(review, today) * OVERDUE_WEIGHT
    score += review.effort * EFFORT_WEIGHT
    if days_diff(today, review.date) <= 0:
        score += DUE_BONUS
    return score


def prioritize(reviews: Iterable, today: date) -> List:
    """Reviews sorted by descending score; ties keep date-then-id order"""
    ordered = sorted(reviews, key=lambda r: (to_date(r.date), str(r.id)))
    return sorted(ordered, key=lambda r: score_review(r, today), reverse=True)


def effective_window(review, today: date):
    """The review's window with neither end before today"""
    start = max(to_date(review.window_start), today)
    end = max(to_date(review.window_end), today)
    return start, end


def plan_rebalance(
    reviews: Sequence,
    capacity: CapacityModel,
    today: date,
    horizon_days: int = 14
) -> RebalanceResult:
    """
    Choose a day for every pending review.

    Nothing is mutated; apply the result with ``apply_placements``.

    Args:
        reviews: pending reviews (``id``, ``date``, ``window_start``, ``window_end``, ``effort``)
        capacity: capacity model of the reviews' owner
        today: first schedulable day
        horizon_days: length of the load forecast reported in the result

    Returns:
        RebalanceResult with one placement per review
    """
    today = to_date(today)
    result = RebalanceResult()
    load: Dict[date, float] = defaultdict(float)

    for review in prioritize(reviews, today):
        start, end = effective_window(review, today)
        chosen = None

        for candidate in date_range(start, end):
            if load[candidate] + review.effort <= capacity.capacity_points(candidate):
                chosen = candidate
                break

        if chosen is None:
            best_ratio = None
            for candidate in date_range(start, add_days(end, FALLBACK_EXTRA_DAYS)):
                ratio = capacity.load_ratio(load[candidate], candidate)
                if best_ratio is None or ratio < best_ratio:
                    best_ratio = ratio
                    chosen = candidate
            result.fallbacks.append(review.id)
            logger.debug(f"Review {review.id} overflowed its window; fallback to {chosen} (load ratio {best_ratio:.2f})")

        load[chosen] += review.effort
        result.placements[review.id] = chosen
        result.order.append(review.id)
        if to_date(review.date) != chosen:
            result.moved.append(review.id)

    horizon_end = add_days(today, horizon_days)
    result.daily_load = {
        day: round(value, 4) for day, value in sorted(load.items()) if today <= day < horizon_end
    }
    return result


def apply_placements(reviews: Iterable, result: RebalanceResult) -> List:
    """Set the planned date on moved reviews and return them"""
    moved = set(result.moved)
    changed = []
    for review in reviews:
        if review.id in moved:
            review.date = result.placements[review.id]
            changed.append(review)
    return changed
