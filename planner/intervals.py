from typing import Dict, List, Mapping, Sequence, Union

from loguru import logger

from planner.enums import Difficulty
from planner.exceptions import EmptyIntervalTable

IntervalTable = Mapping[Union[Difficulty, str], Sequence[int]]

DEFAULT_INTERVALS: Dict[Difficulty, List[int]] = {
    Difficulty.EASY: [14, 60],
    Difficulty.MEDIUM: [7, 21, 60],
    Difficulty.HARD: [2, 7, 15, 30],
}

FALLBACK_OFFSETS: List[int] = [1, 7]

EFFORT: Dict[Difficulty, float] = {
    Difficulty.EASY: 1.0,
    Difficulty.MEDIUM: 1.3,
    Difficulty.HARD: 1.7,
}

REINFORCEMENT_EFFORT = 1.7


class ReviewIntervals:
    """
    Difficulty-dependent review offsets and effort costs.

    An interval table maps each difficulty to the ordered day offsets, counted
    from the study date, on which reviews are generated. Tables are stored as
    JSON keyed by the difficulty's value ("easy", "medium", "hard").
    """

    @staticmethod
    def default_table() -> Dict[str, List[int]]:
        """Default table in its stored (JSON) form"""
        return {difficulty.value: list(offsets) for difficulty, offsets in DEFAULT_INTERVALS.items()}

    @staticmethod
    def effort_of(difficulty: Difficulty) -> float:
        """Load cost of one review for the given difficulty"""
        return EFFORT[Difficulty(difficulty)]

    @staticmethod
    def lookup(intervals: IntervalTable, difficulty: Difficulty) -> List[int]:
        """
        Strict lookup of the offsets for a difficulty.

        Raises:
            EmptyIntervalTable: the table has no offsets for this difficulty
        """
        difficulty = Difficulty(difficulty)
        offsets = None
        if intervals:
            offsets = intervals.get(difficulty.value)
            if offsets is None:
                offsets = intervals.get(difficulty)
        if not offsets:
            raise EmptyIntervalTable(difficulty.value)
        return sorted(int(days) for days in offsets)

    @staticmethod
    def calculate_schedule(intervals: IntervalTable, difficulty: Difficulty) -> List[int]:
        """
        Offsets to generate reviews for, never empty.

        A missing or empty entry is a configuration error: it is logged and the
        default offsets for the difficulty are used instead.
        """
        try:
            return ReviewIntervals.lookup(intervals, difficulty)
        except EmptyIntervalTable as exc:
            fallback = DEFAULT_INTERVALS.get(Difficulty(difficulty), FALLBACK_OFFSETS)
            logger.warning(f"{exc.message}; using default offsets {fallback}")
            return list(fallback)
