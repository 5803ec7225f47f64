from sqlalchemy.orm import Session
from planner.models import Subject
from planner.models.subject import DEFAULT_SUBJECT_COLOR
from typing import List, Optional

def create_subject(db: Session, user_id: str, name: str, color: str = DEFAULT_SUBJECT_COLOR) -> Subject:
    """Create a subject"""
    subject = Subject(user_id=user_id, name=name, color=color)
    db.add(subject)
    db.flush()
    return subject

def get_subjects(db: Session, user_id: str) -> List[Subject]:
    return db.query(Subject).filter(Subject.user_id == user_id).order_by(Subject.name).all()

def get_subject(db: Session, user_id: str, subject_id: str) -> Optional[Subject]:
    return db.query(Subject).filter(
        Subject.user_id == user_id,
        Subject.id == subject_id
    ).first()

def delete_subject(db: Session, subject: Subject) -> None:
    """Delete a subject with its contents and their reviews"""
    db.delete(subject)
    db.flush()
