from datetime import date
from typing import List, Tuple

from loguru import logger

from planner.database import generate_id
from planner.dates import add_days, to_date
from planner.enums import Difficulty, ReviewStatus
from planner.intervals import IntervalTable, ReviewIntervals
from planner.models import Review, StudyContent


class ReviewFactory:
    """
    Builds study contents and their initial review schedules.

    Reviews are generated at their nominal dates; the rebalancer may move
    them afterwards to respect daily capacity.
    """

    @staticmethod
    def build_review(
        user_id: str,
        content_id: str,
        review_date: date,
        effort: float,
        window_start: date = None,
        window_end: date = None
    ) -> Review:
        """Build one pending review; the window defaults to date-1 .. date+2"""
        return Review(
            id=generate_id(),
            user_id=user_id,
            content_id=content_id,
            date=review_date,
            status=ReviewStatus.PENDING,
            window_start=window_start if window_start is not None else add_days(review_date, -1),
            window_end=window_end if window_end is not None else add_days(review_date, 2),
            effort=effort,
            original_date=review_date
        )

    @staticmethod
    def build_reviews(
        user_id: str,
        content_id: str,
        date_studied: date,
        difficulty: Difficulty,
        intervals: IntervalTable
    ) -> List[Review]:
        """One review per configured offset after the study date"""
        date_studied = to_date(date_studied)
        effort = ReviewIntervals.effort_of(difficulty)
        offsets = ReviewIntervals.calculate_schedule(intervals, difficulty)
        return [
            ReviewFactory.build_review(user_id, content_id, add_days(date_studied, days), effort)
            for days in offsets
        ]

    @staticmethod
    def create_content_with_reviews(
        user_id: str,
        subject_id: str,
        topic: str,
        date_studied: date,
        difficulty: Difficulty,
        intervals: IntervalTable
    ) -> Tuple[StudyContent, List[Review]]:
        """
        Build a study content and its review schedule (not yet persisted).

        Returns:
            (content, reviews)
        """
        content = StudyContent(
            id=generate_id(),  # reviews reference it before flush
            user_id=user_id,
            subject_id=subject_id,
            topic=topic,
            date_studied=to_date(date_studied),
            difficulty=Difficulty(difficulty)
        )
        reviews = ReviewFactory.build_reviews(user_id, content.id, content.date_studied, content.difficulty, intervals)
        logger.debug(f"Built {len(reviews)} reviews for content {content.id} ({content.difficulty.value})")
        return content, reviews

    @staticmethod
    def regenerate_reviews(content: StudyContent, intervals: IntervalTable, today: date) -> List[Review]:
        """
        Reviews replacing a content's pending schedule after an edit.

        Only reviews dated today or later are kept. If none survive, a single
        review for tomorrow is returned so the topic is never left unscheduled.
        """
        today = to_date(today)
        reviews = [
            review
            for review in ReviewFactory.build_reviews(
                content.user_id, content.id, content.date_studied, content.difficulty, intervals
            )
            if review.date >= today
        ]
        if not reviews:
            tomorrow = add_days(today, 1)
            reviews.append(ReviewFactory.build_review(
                content.user_id,
                content.id,
                tomorrow,
                ReviewIntervals.effort_of(content.difficulty),
                window_start=today,
                window_end=add_days(tomorrow, 2)
            ))
            logger.debug(f"Content {content.id} has no future reviews left; scheduled fallback for {tomorrow}")
        return reviews
