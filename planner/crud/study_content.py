from sqlalchemy.orm import Session
from planner.models import StudyContent
from typing import List, Optional

def get_contents(db: Session, user_id: str) -> List[StudyContent]:
    """Get all study contents for user"""
    return db.query(StudyContent).filter(
        StudyContent.user_id == user_id
    ).order_by(StudyContent.date_studied, StudyContent.id).all()

def get_content(db: Session, user_id: str, content_id: str) -> Optional[StudyContent]:
    return db.query(StudyContent).filter(
        StudyContent.user_id == user_id,
        StudyContent.id == content_id
    ).first()

def add_content(db: Session, content: StudyContent) -> StudyContent:
    db.add(content)
    db.flush()
    return content

def delete_content(db: Session, content: StudyContent) -> None:
    """Delete a content and all of its reviews"""
    db.delete(content)
    db.flush()
