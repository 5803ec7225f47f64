"""
Planner triggers: every user action that changes the schedule.

Each mutating call holds the user's lock and runs inside a single repository
transaction, so the rebalance that follows a change either lands completely
or not at all. Callers get planner exceptions; nothing is retried here.
"""
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple, Union

from loguru import logger

from planner import dates
from planner.capacity import CapacityModel
from planner.config import settings as app_settings
from planner.dates import DateLike, add_days, date_range, to_date
from planner.enums import (
    Difficulty, ExceptionType, PaceMode, RetentionEventType, ReviewFeedback, ReviewStatus, StudyStage
)
from planner.exceptions import (
    ContentNotFound, InvalidReviewTransition, ReviewNotFound, SubjectNotFound,
    UserAlreadyExists, UserNotFound
)
from planner.factory import ReviewFactory
from planner.locks import user_lock
from planner.models import DayException, RetentionEvent, Review, StudyContent, Subject, User, UserSettings
from planner.rebalancer import RebalanceResult, apply_placements, plan_rebalance
from planner.repository import PlannerRepository
from planner.retention import FEEDBACK_FOR_EVENT, apply_forgot, apply_remembered
from planner.schemas import (
    CapacitySettings, ContentCreate, ContentUpdate, DayExceptionCreate, DayLoad, ReviewIntervalsSchema,
    SuggestedAction, UserCreate
)
from planner.suggestions import next_action, suggest_subjects


class PlannerService:
    """Scheduling operations for the users of one repository"""

    def __init__(self, repository: PlannerRepository, clock: Callable[[], date] = dates.today):
        self.repository = repository
        self.clock = clock

    # Helpers

    def today(self) -> date:
        return to_date(self.clock())

    def _require_user(self, user_id: str) -> User:
        user = self.repository.get_user(user_id)
        if user is None:
            raise UserNotFound(user_id)
        return user

    def _require_settings(self, user_id: str) -> UserSettings:
        user_settings = self.repository.get_settings(user_id)
        if user_settings is None:
            raise UserNotFound(user_id)
        return user_settings

    def _require_content(self, user_id: str, content_id: str) -> StudyContent:
        content = self.repository.get_content(user_id, content_id)
        if content is None:
            raise ContentNotFound(content_id)
        return content

    def _require_review(self, user_id: str, review_id: str) -> Review:
        review = self.repository.get_review(user_id, review_id)
        if review is None:
            raise ReviewNotFound(review_id)
        return review

    def _transition(self, review: Review, status: ReviewStatus, feedback: Optional[ReviewFeedback] = None) -> Review:
        if review.status != ReviewStatus.PENDING:
            raise InvalidReviewTransition(review.id, review.status.value, status.value)
        return self.repository.update_review_status(review, status, feedback)

    def _rebalance(self, user_id: str, horizon_days: Optional[int] = None) -> RebalanceResult:
        """Rebalance inside the caller's transaction"""
        horizon_days = app_settings.rebalance_horizon_days if horizon_days is None else horizon_days
        user_settings = self._require_settings(user_id)
        pending = self.repository.get_pending_reviews(user_id)
        if not pending:
            return RebalanceResult()

        capacity = CapacityModel(user_settings, self.repository.get_exceptions(user_id))
        result = plan_rebalance(pending, capacity, self.today(), horizon_days)
        changed = apply_placements(pending, result)
        self.repository.bulk_update_reviews(changed)
        logger.info(
            f"Rebalanced {len(pending)} pending reviews for user {user_id}: "
            f"{len(changed)} moved, {len(result.fallbacks)} fallback placements"
        )
        return result

    def _update_capacity_settings(self, user_id: str, **updates) -> RebalanceResult:
        with user_lock(user_id), self.repository.transaction():
            user_settings = self._require_settings(user_id)
            current = CapacitySettings(
                daily_limit=user_settings.daily_limit,
                pace_mode=user_settings.pace_mode or PaceMode.NORMAL,
                heavy_days=user_settings.heavy_days or []
            )
            validated = CapacitySettings(**{**current.model_dump(), **updates})
            self.repository.save_settings(
                user_settings, {**{key: getattr(validated, key) for key in updates}, "setup_completed": True}
            )
            self.repository.mark_checklist(user_settings, "adjusted_capacity")
            return self._rebalance(user_id)

    # Users and subjects

    def register_user(
        self, email: str, name: str, goal: Optional[str] = None, stage: Optional[StudyStage] = None
    ) -> User:
        """Create a user with default settings"""
        with self.repository.transaction():
            if self.repository.get_user_by_email(email):
                raise UserAlreadyExists(email)
            user = self.repository.create_user(UserCreate(email=email, name=name, goal=goal, stage=stage))
        logger.info(f"Registered user {user.id}")
        return user

    def complete_onboarding(
        self, user_id: str, goal: Optional[str] = None, stage: Optional[Union[StudyStage, str]] = None
    ) -> List[str]:
        """
        Record the user's goal and study stage and finish onboarding.

        Returns:
            starter subject names suggested for that goal and stage
        """
        updates = {"onboarding_completed": True}
        if goal is not None:
            updates["goal"] = goal
        if stage is not None:
            updates["stage"] = StudyStage(stage)
        with user_lock(user_id), self.repository.transaction():
            user = self._require_user(user_id)
            self.repository.update_user(user, updates)
        logger.info(f"User {user_id} completed onboarding")
        return suggest_subjects(user.goal, user.stage)

    def add_subject(self, user_id: str, name: str, color: Optional[str] = None) -> Subject:
        with user_lock(user_id), self.repository.transaction():
            user_settings = self._require_settings(user_id)
            kwargs = {"color": color} if color else {}
            subject = self.repository.create_subject(user_id, name, **kwargs)
            self.repository.mark_checklist(user_settings, "has_subjects")
        return subject

    def delete_subject(self, user_id: str, subject_id: str) -> RebalanceResult:
        """Delete a subject, its contents and their reviews"""
        with user_lock(user_id), self.repository.transaction():
            subject = self.repository.get_subject(user_id, subject_id)
            if subject is None:
                raise SubjectNotFound(subject_id)
            self.repository.delete_subject(subject)
            result = self._rebalance(user_id)
        logger.info(f"Deleted subject {subject_id} for user {user_id}")
        return result

    # Contents

    def add_content_with_reviews(
        self,
        user_id: str,
        subject_id: str,
        topic: str,
        date_studied: DateLike,
        difficulty: Union[Difficulty, str]
    ) -> Tuple[StudyContent, List[Review]]:
        """
        Log a studied topic, generate its reviews and rebalance.

        Returns:
            (content, reviews) with reviews at their rebalanced dates
        """
        data = ContentCreate(
            subject_id=subject_id,
            topic=topic,
            date_studied=to_date(date_studied),
            difficulty=difficulty
        )
        difficulty = data.difficulty
        with user_lock(user_id), self.repository.transaction():
            user_settings = self._require_settings(user_id)
            if self.repository.get_subject(user_id, data.subject_id) is None:
                raise SubjectNotFound(data.subject_id)

            content, reviews = ReviewFactory.create_content_with_reviews(
                user_id, data.subject_id, data.topic, data.date_studied, difficulty, user_settings.review_intervals
            )
            self.repository.add_content(content)
            self.repository.insert_reviews(reviews)
            self.repository.mark_checklist(user_settings, "has_contents")
            self._rebalance(user_id)
        logger.info(f"Added content {content.id} ({difficulty.value}) with {len(reviews)} reviews")
        return content, reviews

    def update_content(
        self, user_id: str, content_id: str, updates: Union[ContentUpdate, Dict]
    ) -> Tuple[StudyContent, List[Review]]:
        """
        Edit a content. Changing its difficulty or study date replaces its
        pending reviews; completed reviews are kept.

        Returns:
            (content, new reviews); new reviews is empty when nothing was regenerated
        """
        if not isinstance(updates, ContentUpdate):
            updates = ContentUpdate(**updates)
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)

        with user_lock(user_id), self.repository.transaction():
            user_settings = self._require_settings(user_id)
            content = self._require_content(user_id, content_id)
            if "subject_id" in changes and self.repository.get_subject(user_id, changes["subject_id"]) is None:
                raise SubjectNotFound(changes["subject_id"])

            regenerate = (
                ("difficulty" in changes and changes["difficulty"] != content.difficulty)
                or ("date_studied" in changes and changes["date_studied"] != content.date_studied)
            )
            for key, value in changes.items():
                setattr(content, key, value)

            new_reviews = []
            if regenerate:
                removed = self.repository.delete_pending_reviews(content.id)
                new_reviews = ReviewFactory.regenerate_reviews(content, user_settings.review_intervals, self.today())
                self.repository.insert_reviews(new_reviews)
                logger.info(f"Regenerated content {content.id}: {removed} pending removed, {len(new_reviews)} created")
            self._rebalance(user_id)
        return content, new_reviews

    def delete_content(self, user_id: str, content_id: str) -> RebalanceResult:
        """Delete a content and all of its reviews"""
        with user_lock(user_id), self.repository.transaction():
            content = self._require_content(user_id, content_id)
            self.repository.delete_content(content)
            result = self._rebalance(user_id)
        logger.info(f"Deleted content {content_id} for user {user_id}")
        return result

    # Reviews

    def complete_review(
        self, user_id: str, review_id: str, feedback: Optional[Union[ReviewFeedback, str]] = None
    ) -> Review:
        with user_lock(user_id), self.repository.transaction():
            review = self._require_review(user_id, review_id)
            self._transition(review, ReviewStatus.COMPLETED, ReviewFeedback(feedback) if feedback else None)
        return review

    def skip_review(self, user_id: str, review_id: str) -> Review:
        with user_lock(user_id), self.repository.transaction():
            review = self._require_review(user_id, review_id)
            self._transition(review, ReviewStatus.SKIPPED)
        return review

    def adjust_schedule(
        self,
        user_id: str,
        content_id: str,
        event_type: Union[RetentionEventType, str],
        review_id: Optional[str] = None
    ) -> RebalanceResult:
        """
        React to remembered/forgot feedback on a content.

        Args:
            user_id: owner
            content_id: the content the feedback is about
            event_type: "forgot" or "remembered"
            review_id: review being answered, marked completed with matching feedback
        """
        event_type = RetentionEventType(event_type)
        today = self.today()
        with user_lock(user_id), self.repository.transaction():
            self._require_settings(user_id)
            content = self._require_content(user_id, content_id)

            if review_id:
                review = self._require_review(user_id, review_id)
                if review.content_id != content.id:
                    raise ReviewNotFound(review_id)
                self._transition(review, ReviewStatus.COMPLETED, FEEDBACK_FOR_EVENT[event_type])

            self.repository.insert_retention_event(
                RetentionEvent(user_id=user_id, content_id=content.id, type=event_type)
            )

            pending = self.repository.get_pending_reviews(user_id, content.id)
            if event_type == RetentionEventType.FORGOT:
                reinforcement = apply_forgot(user_id, content.id, pending, today)
                if reinforcement is not None:
                    self.repository.insert_reviews([reinforcement])
                    logger.info(f"Content {content.id} forgotten; reinforcement review on {reinforcement.date}")
            else:
                stretched = apply_remembered(pending, today)
                self.repository.bulk_update_reviews(stretched)
                logger.info(f"Content {content.id} remembered; stretched {len(stretched)} pending reviews")

            return self._rebalance(user_id)

    # Capacity

    def add_day_exception(
        self,
        user_id: str,
        day: DateLike,
        exception_type: Union[ExceptionType, str],
        capacity_multiplier: float
    ) -> DayException:
        """Install a one-off capacity override (replacing any for that date) and rebalance"""
        data = DayExceptionCreate(
            date=to_date(day),
            type=exception_type,
            capacity_multiplier=capacity_multiplier
        )
        with user_lock(user_id), self.repository.transaction():
            self._require_settings(user_id)
            exception = self.repository.upsert_exception(DayException(user_id=user_id, **data.model_dump()))
            self._rebalance(user_id)
        logger.info(f"Day exception {exception.type.value} x{data.capacity_multiplier} on {data.date} for user {user_id}")
        return exception

    def set_tomorrow_heavy(self, user_id: str) -> DayException:
        return self.add_day_exception(
            user_id,
            add_days(self.today(), 1),
            ExceptionType.HEAVY,
            app_settings.heavy_tomorrow_multiplier
        )

    def set_pace(self, user_id: str, mode: Union[PaceMode, str]) -> RebalanceResult:
        return self._update_capacity_settings(user_id, pace_mode=PaceMode(mode))

    def set_daily_limit(self, user_id: str, daily_limit: int) -> RebalanceResult:
        return self._update_capacity_settings(user_id, daily_limit=daily_limit)

    def set_heavy_days(self, user_id: str, heavy_days: List[int]) -> RebalanceResult:
        return self._update_capacity_settings(user_id, heavy_days=list(heavy_days))

    def set_review_intervals(self, user_id: str, intervals: Dict[str, List[int]]) -> UserSettings:
        """Replace the interval table used for new and regenerated contents"""
        table = ReviewIntervalsSchema(**intervals).as_table()
        with user_lock(user_id), self.repository.transaction():
            user_settings = self._require_settings(user_id)
            self.repository.save_settings(user_settings, {"review_intervals": table, "setup_completed": True})
        return user_settings

    def rebalance(self, user_id: str, horizon_days: Optional[int] = None) -> RebalanceResult:
        with user_lock(user_id), self.repository.transaction():
            return self._rebalance(user_id, horizon_days)

    def handle_overdue_recovery(self, user_id: str) -> RebalanceResult:
        return self.rebalance(user_id)

    # Views

    def get_settings(self, user_id: str) -> UserSettings:
        return self._require_settings(user_id)

    def list_subjects(self, user_id: str) -> List[Subject]:
        self._require_user(user_id)
        return self.repository.get_subjects(user_id)

    def list_contents(self, user_id: str) -> List[StudyContent]:
        self._require_user(user_id)
        return self.repository.get_contents(user_id)

    def list_reviews(self, user_id: str, content_id: Optional[str] = None, include_all: bool = False) -> List[Review]:
        """Reviews in date order; pending only unless ``include_all``"""
        self._require_user(user_id)
        if not include_all:
            return self.repository.get_pending_reviews(user_id, content_id)
        reviews = self.repository.get_reviews(user_id)
        if content_id is not None:
            reviews = [review for review in reviews if review.content_id == content_id]
        return reviews

    def suggest_subjects(self, user_id: str) -> List[str]:
        """Starter subjects for the user's goal and study stage"""
        user = self._require_user(user_id)
        return suggest_subjects(user.goal, user.stage)

    def next_action(self, user_id: str) -> SuggestedAction:
        self._require_settings(user_id)
        return next_action(
            self.repository.get_subjects(user_id),
            self.repository.get_contents(user_id),
            self.repository.get_pending_reviews(user_id),
            self.today()
        )

    def day_load(self, user_id: str, start: Optional[DateLike] = None, days: int = 14) -> List[DayLoad]:
        """Scheduled review count and load against capacity for each day from ``start``"""
        start = to_date(start) if start is not None else self.today()
        end = add_days(start, days - 1)
        user_settings = self._require_settings(user_id)
        capacity = CapacityModel(user_settings, self.repository.get_exceptions(user_id))
        reviews = self.repository.get_reviews_between(user_id, start, end)

        loads = []
        for day in date_range(start, end):
            scheduled = [review for review in reviews if review.date == day]
            loads.append(DayLoad(
                date=day,
                review_count=len(scheduled),
                load=round(sum(review.effort for review in scheduled), 2),
                capacity=round(capacity.capacity(day), 2)
            ))
        return loads

    def mark_calendar_checked(self, user_id: str) -> None:
        with user_lock(user_id), self.repository.transaction():
            self.repository.mark_checklist(self._require_settings(user_id), "checked_calendar")
