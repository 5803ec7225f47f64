from planner.crud.user import create_user, get_user, get_user_by_email, update_user
from planner.crud.user_settings import get_settings, update_settings, mark_checklist
from planner.crud.subject import create_subject, get_subjects, get_subject, delete_subject
from planner.crud.study_content import get_contents, get_content, add_content, delete_content
from planner.crud.review import (
    get_reviews,
    get_pending_reviews,
    get_reviews_between,
    get_review,
    insert_reviews,
    bulk_update_reviews,
    update_review_status,
    delete_pending_reviews
)
from planner.crud.day_exception import get_exceptions, upsert_exception
from planner.crud.retention_event import insert_retention_event, get_retention_events

__all__ = [
    "create_user",
    "get_user",
    "update_user",
    "get_user_by_email",
    "get_settings",
    "update_settings",
    "mark_checklist",
    "create_subject",
    "get_subjects",
    "get_subject",
    "delete_subject",
    "get_contents",
    "get_content",
    "add_content",
    "delete_content",
    "get_reviews",
    "get_pending_reviews",
    "get_reviews_between",
    "get_review",
    "insert_reviews",
    "bulk_update_reviews",
    "update_review_status",
    "delete_pending_reviews",
    "get_exceptions",
    "upsert_exception",
    "insert_retention_event",
    "get_retention_events",
]
