from datetime import date

import pytest

from planner.enums import Difficulty, ReviewStatus
from planner.exceptions import EmptyIntervalTable
from planner.factory import ReviewFactory
from planner.intervals import DEFAULT_INTERVALS, ReviewIntervals
from planner.schemas import ReviewIntervalsSchema


def test_effort_per_difficulty():
    assert ReviewIntervals.effort_of(Difficulty.EASY) == 1.0
    assert ReviewIntervals.effort_of(Difficulty.MEDIUM) == 1.3
    assert ReviewIntervals.effort_of(Difficulty.HARD) == 1.7


def test_default_table_is_json_friendly():
    assert ReviewIntervals.default_table() == {
        "easy": [14, 60],
        "medium": [7, 21, 60],
        "hard": [2, 7, 15, 30],
    }


def test_lookup_raises_for_missing_difficulty():
    with pytest.raises(EmptyIntervalTable):
        ReviewIntervals.lookup({"easy": [1], "medium": []}, Difficulty.MEDIUM)
    with pytest.raises(EmptyIntervalTable):
        ReviewIntervals.lookup({"easy": [1]}, Difficulty.HARD)


def test_calculate_schedule_falls_back_to_defaults():
    assert ReviewIntervals.calculate_schedule({"hard": []}, Difficulty.HARD) == DEFAULT_INTERVALS[Difficulty.HARD]
    assert ReviewIntervals.calculate_schedule({}, Difficulty.EASY) == DEFAULT_INTERVALS[Difficulty.EASY]


def test_calculate_schedule_sorts_offsets():
    assert ReviewIntervals.calculate_schedule({"medium": [21, 7]}, Difficulty.MEDIUM) == [7, 21]


def test_medium_content_schedule():
    content, reviews = ReviewFactory.create_content_with_reviews(
        "u1", "s1", "Krebs cycle", "2024-01-01", Difficulty.MEDIUM, {"medium": [7, 21, 60]}
    )

    assert [r.date for r in reviews] == [date(2024, 1, 8), date(2024, 1, 22), date(2024, 3, 1)]
    assert all(r.effort == 1.3 for r in reviews)
    assert all(r.status == ReviewStatus.PENDING for r in reviews)
    assert all(r.content_id == content.id for r in reviews)
    assert [r.original_date for r in reviews] == [r.date for r in reviews]
    assert reviews[0].window_start == date(2024, 1, 7)
    assert reviews[0].window_end == date(2024, 1, 10)


def test_regenerate_keeps_only_future_reviews():
    content, _ = ReviewFactory.create_content_with_reviews(
        "u1", "s1", "Topic", date(2024, 1, 1), Difficulty.HARD, ReviewIntervals.default_table()
    )
    reviews = ReviewFactory.regenerate_reviews(content, ReviewIntervals.default_table(), date(2024, 1, 10))

    # offsets 2 and 7 are in the past
    assert [r.date for r in reviews] == [date(2024, 1, 16), date(2024, 1, 31)]


def test_regenerate_falls_back_to_tomorrow():
    content, _ = ReviewFactory.create_content_with_reviews(
        "u1", "s1", "Topic", date(2023, 1, 1), Difficulty.EASY, ReviewIntervals.default_table()
    )
    reviews = ReviewFactory.regenerate_reviews(content, ReviewIntervals.default_table(), date(2024, 1, 10))

    assert len(reviews) == 1
    fallback = reviews[0]
    assert fallback.date == date(2024, 1, 11)
    assert fallback.window_start == date(2024, 1, 10)
    assert fallback.window_end == date(2024, 1, 13)
    assert fallback.effort == 1.0


def test_interval_schema_rejects_empty_offsets():
    with pytest.raises(EmptyIntervalTable):
        ReviewIntervalsSchema(easy=[1], medium=[], hard=[2])
    assert ReviewIntervalsSchema(easy=[5, 1], medium=[3], hard=[2]).as_table()["easy"] == [1, 5]
