"""
Persistence port used by the planner service.

The repository exposes the reads and writes the scheduling engine needs, scoped
by user id, and owns the transaction boundary. It is constructed around a
SQLAlchemy session; nothing in the engine reaches the session directly.
"""
from contextlib import contextmanager
from datetime import date
from typing import List, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from planner import crud
from planner.enums import ReviewFeedback, ReviewStatus
from planner.exceptions import PersistenceFailure, PlannerError
from planner.models import (
    DayException, RetentionEvent, Review, StudyContent, Subject, User, UserSettings
)


class PlannerRepository:
    """SQLAlchemy-backed store for one session"""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self):
        """
        All-or-nothing unit of work.

        Commits when the block completes; any error rolls back every change made
        inside it. Database errors are re-raised as PersistenceFailure.
        """
        try:
            yield self
            self.db.commit()
        except PlannerError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Database error, transaction rolled back: {exc}")
            raise PersistenceFailure(f"Persistence failure: {exc}", {"error": type(exc).__name__}) from exc
        except Exception:
            self.db.rollback()
            raise

    # Reads

    def get_user(self, user_id: str) -> Optional[User]:
        return crud.get_user(self.db, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return crud.get_user_by_email(self.db, email)

    def get_settings(self, user_id: str) -> Optional[UserSettings]:
        return crud.get_settings(self.db, user_id)

    def get_exceptions(self, user_id: str) -> List[DayException]:
        return crud.get_exceptions(self.db, user_id)

    def get_subjects(self, user_id: str) -> List[Subject]:
        return crud.get_subjects(self.db, user_id)

    def get_subject(self, user_id: str, subject_id: str) -> Optional[Subject]:
        return crud.get_subject(self.db, user_id, subject_id)

    def get_contents(self, user_id: str) -> List[StudyContent]:
        return crud.get_contents(self.db, user_id)

    def get_content(self, user_id: str, content_id: str) -> Optional[StudyContent]:
        return crud.get_content(self.db, user_id, content_id)

    def get_reviews(self, user_id: str) -> List[Review]:
        return crud.get_reviews(self.db, user_id)

    def get_pending_reviews(self, user_id: str, content_id: Optional[str] = None) -> List[Review]:
        return crud.get_pending_reviews(self.db, user_id, content_id)

    def get_reviews_between(self, user_id: str, start: date, end: date) -> List[Review]:
        return crud.get_reviews_between(self.db, user_id, start, end)

    def get_review(self, user_id: str, review_id: str) -> Optional[Review]:
        return crud.get_review(self.db, user_id, review_id)

    def get_retention_events(self, user_id: str, content_id: Optional[str] = None) -> List[RetentionEvent]:
        return crud.get_retention_events(self.db, user_id, content_id)

    # Writes

    def create_user(self, user_data) -> User:
        return crud.create_user(self.db, user_data)

    def update_user(self, user: User, updates: dict) -> User:
        return crud.update_user(self.db, user, updates)

    def save_settings(self, user_settings: UserSettings, updates: dict) -> UserSettings:
        return crud.update_settings(self.db, user_settings, updates)

    def mark_checklist(self, user_settings: UserSettings, key: str) -> None:
        crud.mark_checklist(self.db, user_settings, key)

    def create_subject(self, user_id: str, name: str, **kwargs) -> Subject:
        return crud.create_subject(self.db, user_id, name, **kwargs)

    def delete_subject(self, subject: Subject) -> None:
        crud.delete_subject(self.db, subject)

    def add_content(self, content: StudyContent) -> StudyContent:
        return crud.add_content(self.db, content)

    def delete_content(self, content: StudyContent) -> None:
        crud.delete_content(self.db, content)

    def insert_reviews(self, reviews: List[Review]) -> List[Review]:
        return crud.insert_reviews(self.db, reviews)

    def bulk_update_reviews(self, reviews: List[Review]) -> int:
        return crud.bulk_update_reviews(self.db, reviews)

    def update_review_status(
        self, review: Review, status: ReviewStatus, feedback: Optional[ReviewFeedback] = None
    ) -> Review:
        return crud.update_review_status(self.db, review, status, feedback)

    def delete_pending_reviews(self, content_id: str) -> int:
        return crud.delete_pending_reviews(self.db, content_id)

    def insert_retention_event(self, event: RetentionEvent) -> RetentionEvent:
        return crud.insert_retention_event(self.db, event)

    def upsert_exception(self, exception: DayException) -> DayException:
        return crud.upsert_exception(self.db, exception)
