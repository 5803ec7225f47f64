from datetime import date
from typing import List, Optional, Sequence

from planner.dates import add_days, to_date
from planner.enums import ReviewStatus, StudyStage, SuggestionIcon
from planner.schemas import SuggestedAction

HEAVY_TOMORROW_THRESHOLD = 7


def next_action(subjects: Sequence, contents: Sequence, reviews: Sequence, today: date) -> SuggestedAction:
    """
    Pick the single most useful next step for the user.

    Rules, first match wins: create a subject, log a first content, clear
    reviews due today (or earlier), lighten an overloaded tomorrow.
    """
    today = to_date(today)
    tomorrow = add_days(today, 1)
    pending = [review for review in reviews if review.status == ReviewStatus.PENDING]
    due_today = sum(1 for review in pending if to_date(review.date) <= today)
    due_tomorrow = sum(1 for review in pending if to_date(review.date) == tomorrow)

    if not subjects:
        return SuggestedAction(
            key="add_subject", route="dashboard", action="focus_add_subject",
            priority=1, icon=SuggestionIcon.LAYERS
        )

    if not contents:
        return SuggestedAction(
            key="add_content", route="dashboard", action="focus_add_content",
            priority=2, icon=SuggestionIcon.BOOK
        )

    if due_today > 0:
        return SuggestedAction(
            key="do_reviews", route="calendar", action="open_day", date=today,
            count=due_today, priority=3, icon=SuggestionIcon.CALENDAR
        )

    if due_tomorrow > HEAVY_TOMORROW_THRESHOLD:
        return SuggestedAction(
            key="plan_tomorrow", route="calendar", action="open_day", date=tomorrow,
            count=due_tomorrow, priority=4, icon=SuggestionIcon.FAST_FORWARD
        )

    return SuggestedAction(
        key="all_good", route="dashboard", action="focus_add_content",
        priority=99, icon=SuggestionIcon.CHECK
    )


SCHOOL_SUBJECTS = [
    "Mathematics", "Portuguese", "Essay Writing", "History", "Geography",
    "Physics", "Chemistry", "Biology", "Philosophy", "English",
]

# (goal keywords, subjects); first match wins
SCHOOL_TRACKS = [
    (("med", "saúde", "health"), ["Biology", "Chemistry", "Physics", "Essay Writing", "Mathematics", "Portuguese"]),
    (("eng", "exata"), ["Mathematics", "Physics", "Chemistry", "Essay Writing", "Portuguese"]),
    (("dir", "human", "law"), ["History", "Geography", "Portuguese", "Essay Writing", "Philosophy", "Sociology"]),
]

COLLEGE_TRACKS = [
    (("med", "saúde", "bio", "health"), ["Anatomy", "Physiology", "Histology", "Pathology", "Pharmacology", "Biochemistry"]),
    (("eng", "exata", "comput"), ["Calculus", "General Physics", "Linear Algebra", "Algorithms", "Strength of Materials"]),
    (("dir", "oab", "lei", "law"), ["Constitutional Law", "Administrative Law", "Criminal Law", "Civil Law", "Civil Procedure"]),
    (("adm", "gest", "neg", "business"), ["Management Theory", "Accounting", "Marketing", "Finance", "People Management"]),
    (("ing", "idioma", "language"), ["Advanced Grammar", "Vocabulary", "Listening", "Reading", "Speaking"]),
]

COLLEGE_FALLBACK = ["Theory Course", "Practical Course", "Project", "Thesis", "Internship"]


def suggest_subjects(goal: Optional[str] = None, stage: Optional[StudyStage] = None) -> List[str]:
    """
    Starter subjects for a study goal.

    Keywords in the goal pick a track. Outside college the tracks stay at
    high-school level and default to the general school curriculum. A missing
    stage counts as college.
    """
    text = (goal or "").lower()
    stage = StudyStage(stage) if stage else StudyStage.COLLEGE
    school = stage != StudyStage.COLLEGE

    for keywords, subjects in (SCHOOL_TRACKS if school else COLLEGE_TRACKS):
        if any(keyword in text for keyword in keywords):
            return list(subjects)
    return list(SCHOOL_SUBJECTS if school else COLLEGE_FALLBACK)
