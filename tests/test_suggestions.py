from datetime import date, timedelta
from types import SimpleNamespace

from planner.enums import ReviewStatus, StudyStage, SuggestionIcon
from planner.suggestions import next_action, suggest_subjects

TODAY = date(2024, 1, 10)


def review(offset, status=ReviewStatus.PENDING):
    return SimpleNamespace(date=TODAY + timedelta(days=offset), status=status)


def test_no_subjects():
    action = next_action([], [], [], TODAY)
    assert action.key == "add_subject"
    assert action.priority == 1
    assert action.icon == SuggestionIcon.LAYERS


def test_no_contents():
    action = next_action(["s"], [], [], TODAY)
    assert action.key == "add_content"
    assert action.action == "focus_add_content"


def test_reviews_due_today_or_earlier():
    action = next_action(["s"], ["c"], [review(0), review(-2), review(3), review(-1, ReviewStatus.COMPLETED)], TODAY)
    assert action.key == "do_reviews"
    assert action.count == 2
    assert action.date == TODAY
    assert action.route == "calendar"


def test_heavy_tomorrow():
    action = next_action(["s"], ["c"], [review(1) for _ in range(8)], TODAY)
    assert action.key == "plan_tomorrow"
    assert action.count == 8
    assert action.date == TODAY + timedelta(days=1)


def test_all_good():
    action = next_action(["s"], ["c"], [review(1) for _ in range(7)], TODAY)
    assert action.key == "all_good"
    assert action.priority == 99
    assert action.icon == SuggestionIcon.CHECK


def test_subjects_for_college_goals():
    assert suggest_subjects("Medicine", StudyStage.COLLEGE)[0] == "Anatomy"
    assert suggest_subjects("Computer Science", StudyStage.COLLEGE)[0] == "Calculus"
    assert suggest_subjects("Law school", StudyStage.COLLEGE)[0] == "Constitutional Law"
    assert suggest_subjects("Business administration", StudyStage.COLLEGE)[0] == "Management Theory"
    assert suggest_subjects("Languages", StudyStage.COLLEGE)[0] == "Advanced Grammar"
    assert suggest_subjects("Music", StudyStage.COLLEGE) == [
        "Theory Course", "Practical Course", "Project", "Thesis", "Internship"
    ]


def test_missing_stage_counts_as_college():
    assert suggest_subjects("medicina") == suggest_subjects("medicina", StudyStage.COLLEGE)
    assert suggest_subjects(None, None)[0] == "Theory Course"


def test_subjects_before_college_stay_at_school_level():
    assert suggest_subjects("Medicine", StudyStage.HIGH_SCHOOL)[0] == "Biology"
    assert suggest_subjects("Engineering", "contest")[0] == "Mathematics"
    assert "Sociology" in suggest_subjects("Direito", StudyStage.SELF_LEARNING)
    assert len(suggest_subjects("", StudyStage.HIGH_SCHOOL)) == 10
