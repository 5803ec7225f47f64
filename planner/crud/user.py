from sqlalchemy.orm import Session
from planner.models import User, UserSettings
from planner.schemas import UserCreate
from planner.intervals import ReviewIntervals
from planner.config import settings
from typing import Optional

DEFAULT_CHECKLIST = {
    "has_subjects": False,
    "has_contents": False,
    "checked_calendar": False,
    "adjusted_capacity": False
}

def create_user(db: Session, user: UserCreate) -> User:
    """Create a user together with default planner settings"""
    db_user = User(**user.model_dump())
    db.add(db_user)
    db.flush()
    db.add(UserSettings(
        user_id=db_user.id,
        daily_limit=settings.default_daily_limit,
        review_intervals=ReviewIntervals.default_table(),
        heavy_days=[],
        checklist=dict(DEFAULT_CHECKLIST)
    ))
    db.flush()
    return db_user

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()

def update_user(db: Session, user: User, updates: dict) -> User:
    """Apply field updates to a user"""
    for key, value in updates.items():
        setattr(user, key, value)
    db.flush()
    return user
