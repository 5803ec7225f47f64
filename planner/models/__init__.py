from planner.models.user import User
from planner.models.user_settings import UserSettings
from planner.models.subject import Subject
from planner.models.study_content import StudyContent
from planner.models.review import Review
from planner.models.day_exception import DayException
from planner.models.retention_event import RetentionEvent

__all__ = [
    "User",
    "UserSettings",
    "Subject",
    "StudyContent",
    "Review",
    "DayException",
    "RetentionEvent"
]
