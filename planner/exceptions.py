"""Planner exception hierarchy."""
from typing import Any, Dict, Optional


class PlannerError(Exception):
    """Base exception for the planner."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidDateFormat(PlannerError):
    """A date string is not a valid YYYY-MM-DD calendar date."""

    def __init__(self, value: Any):
        super().__init__(f"Invalid date format: {value!r} (expected YYYY-MM-DD)", {"value": value})


class UserNotFound(PlannerError):
    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} not found", {"user_id": user_id})


class UserAlreadyExists(PlannerError):
    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists", {"email": email})


class SubjectNotFound(PlannerError):
    def __init__(self, subject_id: str):
        super().__init__(f"Subject {subject_id} not found", {"subject_id": subject_id})


class ContentNotFound(PlannerError):
    def __init__(self, content_id: str):
        super().__init__(f"Content {content_id} not found", {"content_id": content_id})


class ReviewNotFound(PlannerError):
    def __init__(self, review_id: str):
        super().__init__(f"Review {review_id} not found", {"review_id": review_id})


class InvalidReviewTransition(PlannerError):
    """A review in a terminal state cannot change status."""

    def __init__(self, review_id: str, current: str, target: str):
        super().__init__(
            f"Review {review_id} is {current} and cannot become {target}",
            {"review_id": review_id, "current": current, "target": target},
        )


class PersistenceFailure(PlannerError):
    """The backing store failed; the surrounding transaction was rolled back."""


class EmptyIntervalTable(PlannerError):
    def __init__(self, difficulty: str):
        super().__init__(
            f"No review intervals configured for difficulty {difficulty}",
            {"difficulty": difficulty},
        )
