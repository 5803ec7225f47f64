from sqlalchemy.orm import Session
from planner.models import RetentionEvent
from typing import List, Optional

def insert_retention_event(db: Session, event: RetentionEvent) -> RetentionEvent:
    """Append a retention event"""
    db.add(event)
    db.flush()
    return event

def get_retention_events(db: Session, user_id: str, content_id: Optional[str] = None) -> List[RetentionEvent]:
    query = db.query(RetentionEvent).filter(RetentionEvent.user_id == user_id)
    if content_id is not None:
        query = query.filter(RetentionEvent.content_id == content_id)
    return query.order_by(RetentionEvent.created_at).all()
