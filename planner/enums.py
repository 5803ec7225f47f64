from enum import Enum


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ReviewStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    SKIPPED = "skipped"


class ReviewFeedback(str, Enum):
    REMEMBERED = "remembered"
    SOMEWHAT = "somewhat"
    FORGOT = "forgot"


class RetentionEventType(str, Enum):
    REMEMBERED = "remembered"
    FORGOT = "forgot"


class PaceMode(str, Enum):
    NORMAL = "normal"
    FASTER = "faster"
    SLOWER = "slower"


class ExceptionType(str, Enum):
    HEAVY = "heavy"
    UNAVAILABLE = "unavailable"
    EXAM = "exam"


class StudyStage(str, Enum):
    HIGH_SCHOOL = "high_school"
    COLLEGE = "college"
    CONTEST = "contest"
    SELF_LEARNING = "self_learning"


class SuggestionIcon(str, Enum):
    """Visual tag for a suggested action; the UI maps it to an icon."""
    LAYERS = "layers"
    BOOK = "book"
    CALENDAR = "calendar"
    FAST_FORWARD = "fast_forward"
    CHECK = "check"
