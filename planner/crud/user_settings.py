from sqlalchemy.orm import Session
from planner.models import UserSettings
from planner.crud.user import DEFAULT_CHECKLIST
from typing import Optional

def get_settings(db: Session, user_id: str) -> Optional[UserSettings]:
    """Get planner settings; the row is returned as stored"""
    return db.query(UserSettings).filter(UserSettings.user_id == user_id).first()

def update_settings(db: Session, user_settings: UserSettings, updates: dict) -> UserSettings:
    """Apply field updates to planner settings"""
    for key, value in updates.items():
        setattr(user_settings, key, value)
    db.flush()
    return user_settings

def checklist_of(user_settings: UserSettings) -> dict:
    """Checklist with unset items filled in as False"""
    return {**DEFAULT_CHECKLIST, **(user_settings.checklist or {})}

def mark_checklist(db: Session, user_settings: UserSettings, key: str) -> None:
    """Tick an onboarding checklist item once"""
    checklist = checklist_of(user_settings)
    if not checklist.get(key):
        checklist[key] = True
        # Reassign so the JSON column is flagged dirty
        user_settings.checklist = checklist
        db.flush()
