"""
Schedule adjustments driven by remembered/forgot feedback.

Forgetting a topic adds a reinforcement review for tomorrow unless one is
already due by then. Remembering it stretches every remaining review outward
by 20% of its distance from today, at least two days. Both are heuristics,
not a full SM-2 recalculation.
"""
import math
from datetime import date
from typing import List, Optional, Sequence

from planner.dates import add_days, days_diff, to_date
from planner.enums import RetentionEventType, ReviewFeedback
from planner.factory import ReviewFactory
from planner.intervals import REINFORCEMENT_EFFORT

MIN_STRETCH_DAYS = 2
STRETCH_FACTOR = 0.2

FEEDBACK_FOR_EVENT = {
    RetentionEventType.FORGOT: ReviewFeedback.FORGOT,
    RetentionEventType.REMEMBERED: ReviewFeedback.REMEMBERED,
}


def stretch_days(review_date: date, today: date) -> int:
    """How far a remembered review is pushed"""
    days_until_due = days_diff(today, review_date)
    return max(MIN_STRETCH_DAYS, math.ceil(days_until_due * STRETCH_FACTOR))


def stretch_review(review, today: date) -> None:
    """Push a pending review outward and rebuild its window around the new day"""
    new_date = add_days(review.date, stretch_days(review.date, today))
    review.date = new_date
    review.original_date = new_date
    review.window_start = add_days(new_date, -1)
    review.window_end = add_days(new_date, 3)


def reinforcement_review(user_id: str, content_id: str, today: date):
    """Hard-cost review for tomorrow after a topic was forgotten"""
    tomorrow = add_days(today, 1)
    return ReviewFactory.build_review(
        user_id,
        content_id,
        tomorrow,
        REINFORCEMENT_EFFORT,
        window_start=to_date(today),
        window_end=add_days(tomorrow, 1)
    )


def apply_forgot(user_id: str, content_id: str, pending: Sequence, today: date) -> Optional[object]:
    """
    Reinforcement review to insert, or None when a review is already due by tomorrow.

    Existing reviews are left untouched.
    """
    tomorrow = add_days(today, 1)
    if any(to_date(review.date) <= tomorrow for review in pending):
        return None
    return reinforcement_review(user_id, content_id, today)


def apply_remembered(pending: Sequence, today: date) -> List:
    """Stretch every pending review in place; returns them in date order"""
    ordered = sorted(pending, key=lambda review: to_date(review.date))
    for review in ordered:
        stretch_review(review, today)
    return ordered
