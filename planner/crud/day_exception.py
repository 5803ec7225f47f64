from sqlalchemy.orm import Session
from planner.models import DayException
from typing import List

def get_exceptions(db: Session, user_id: str) -> List[DayException]:
    return db.query(DayException).filter(
        DayException.user_id == user_id
    ).order_by(DayException.date).all()

def upsert_exception(db: Session, exception: DayException) -> DayException:
    """Store a day exception, replacing any existing one for the same user and date"""
    existing = db.query(DayException).filter(
        DayException.user_id == exception.user_id,
        DayException.date == exception.date
    ).first()
    if existing:
        db.delete(existing)
        db.flush()
    db.add(exception)
    db.flush()
    return exception
