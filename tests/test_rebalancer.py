import random
from dataclasses import dataclass
from datetime import date, timedelta
from types import SimpleNamespace

from planner.capacity import CapacityModel
from planner.enums import PaceMode
from planner.rebalancer import (
    apply_placements, effective_window, overdue_days, plan_rebalance, prioritize, score_review
)

TODAY = date(2024, 1, 10)


@dataclass
class Slot:
    id: str
    date: date
    window_start: date
    window_end: date
    effort: float = 1.0


def slot(review_id, offset, effort=1.0, start=-1, end=2):
    day = TODAY + timedelta(days=offset)
    return Slot(review_id, day, day + timedelta(days=start), day + timedelta(days=end), effort)


def capacity(daily_limit=5, heavy_days=None, exceptions=()):
    settings = SimpleNamespace(daily_limit=daily_limit, heavy_days=heavy_days or [], pace_mode=PaceMode.NORMAL)
    return CapacityModel(settings, exceptions, slack=1.3)


def test_score_weights_overdue_effort_and_due():
    overdue = slot("a", -6, effort=1.0)  # window ends 4 days ago
    assert overdue_days(overdue, TODAY) == 4
    assert score_review(overdue, TODAY) == 4 * 100 + 10 + 50

    due_today = slot("b", 0, effort=1.7)
    assert score_review(due_today, TODAY) == 1.7 * 10 + 50

    future = slot("c", 5, effort=1.3)
    assert score_review(future, TODAY) == 13


def test_prioritize_orders_by_score_then_date():
    reviews = [slot("future", 5), slot("due", 0), slot("late", -10), slot("hard", 5, effort=1.7)]
    assert [r.id for r in prioritize(reviews, TODAY)] == ["late", "due", "hard", "future"]


def test_effective_window_clamped_to_today():
    assert effective_window(slot("a", -10), TODAY) == (TODAY, TODAY)
    assert effective_window(slot("b", 0), TODAY) == (TODAY, TODAY + timedelta(days=2))


def test_every_review_gets_exactly_one_placement():
    rng = random.Random(7)
    reviews = [
        slot(f"r{i}", rng.randint(-20, 40), effort=rng.choice([1.0, 1.3, 1.7]))
        for i in range(60)
    ]
    result = plan_rebalance(reviews, capacity(daily_limit=3), TODAY)

    assert len(result.placements) == len(reviews)
    assert set(result.placements) == {r.id for r in reviews}
    assert sorted(result.order) == sorted(r.id for r in reviews)
    assert all(day >= TODAY for day in result.placements.values())


def test_in_window_placement_when_room_exists():
    rng = random.Random(11)
    reviews = [slot(f"r{i}", rng.randint(0, 10)) for i in range(25)]
    result = plan_rebalance(reviews, capacity(daily_limit=4), TODAY)

    fallbacks = set(result.fallbacks)
    for review in reviews:
        if review.id not in fallbacks:
            start, end = effective_window(review, TODAY)
            assert start <= result.placements[review.id] <= end


def test_first_fitting_day_of_window_wins():
    day = TODAY + timedelta(days=5)
    reviews = [slot("a", 5), slot("b", 5)]
    result = plan_rebalance(reviews, capacity(daily_limit=1), TODAY)

    assert result.placements == {"a": day - timedelta(days=1), "b": day}
    assert result.fallbacks == []


def test_more_overdue_review_wins_contended_slot():
    less = Slot("less", TODAY - timedelta(days=2), TODAY - timedelta(days=3), TODAY - timedelta(days=1))
    more = Slot("more", TODAY - timedelta(days=6), TODAY - timedelta(days=7), TODAY - timedelta(days=5))
    result = plan_rebalance([less, more], capacity(daily_limit=1), TODAY)

    assert result.order.index("more") < result.order.index("less")
    assert result.placements["more"] == TODAY
    assert result.placements["less"] == TODAY + timedelta(days=1)
    assert result.fallbacks == ["less"]


def test_ten_reviews_on_one_day_with_capacity_five():
    day = TODAY + timedelta(days=3)
    reviews = [Slot(f"r{i:02d}", day, day, day, 1.0) for i in range(10)]
    result = plan_rebalance(reviews, capacity(daily_limit=5), TODAY)

    placed = list(result.placements.values())
    assert placed.count(day) == 6
    assert placed.count(day + timedelta(days=1)) == 2
    assert placed.count(day + timedelta(days=2)) == 2
    assert len(result.fallbacks) == 4
    # the first six in processing order kept the day
    assert all(result.placements[rid] == day for rid in result.order[:6])


def test_higher_daily_limit_never_places_fewer_reviews_early():
    backlog = [slot(f"r{i:02d}", 0) for i in range(12)]

    def placed_by(limit):
        result = plan_rebalance(backlog, capacity(daily_limit=limit), TODAY)
        return [
            sum(1 for day in result.placements.values() if day <= TODAY + timedelta(days=d))
            for d in range(7)
        ]

    previous = placed_by(1)
    for limit in range(2, 8):
        current = placed_by(limit)
        assert all(c >= p for c, p in zip(current, previous)), (limit, previous, current)
        previous = current


def test_unavailable_day_is_skipped():
    blocked = TODAY + timedelta(days=3)
    exceptions = [SimpleNamespace(date=blocked, capacity_multiplier=0.0)]
    review = Slot("a", blocked, blocked, blocked + timedelta(days=1))
    result = plan_rebalance([review], capacity(exceptions=exceptions), TODAY)

    assert result.placements["a"] == blocked + timedelta(days=1)
    assert result.moved == ["a"]


def test_overdue_review_is_pulled_to_today():
    review = slot("late", -10)
    result = plan_rebalance([review], capacity(), TODAY)
    assert result.placements["late"] == TODAY


def test_empty_backlog():
    result = plan_rebalance([], capacity(), TODAY)
    assert result.placements == {}
    assert result.moved_count == 0


def test_daily_load_limited_to_horizon():
    reviews = [slot("near", 3), slot("far", 30)]
    result = plan_rebalance(reviews, capacity(), TODAY, horizon_days=14)

    assert result.placements["far"] == TODAY + timedelta(days=29)
    assert result.daily_load == {TODAY + timedelta(days=2): 1.0}


def test_plan_does_not_mutate_and_apply_updates_moved_only():
    reviews = [slot("a", 5), slot("b", 5)]
    result = plan_rebalance(reviews, capacity(daily_limit=1), TODAY)
    assert reviews[0].date == TODAY + timedelta(days=5)

    changed = apply_placements(reviews, result)
    assert [r.id for r in changed] == ["a"]
    assert reviews[0].date == TODAY + timedelta(days=4)
    assert reviews[1].date == TODAY + timedelta(days=5)


def test_rebalance_is_stable_once_applied():
    rng = random.Random(3)
    reviews = [slot(f"r{i}", rng.randint(-5, 12)) for i in range(30)]
    model = capacity(daily_limit=50)
    apply_placements(reviews, plan_rebalance(reviews, model, TODAY))

    assert plan_rebalance(reviews, model, TODAY).moved == []
