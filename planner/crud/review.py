from sqlalchemy.orm import Session
from planner.models import Review
from planner.enums import ReviewStatus, ReviewFeedback
from datetime import date
from typing import List, Optional

def get_reviews(db: Session, user_id: str) -> List[Review]:
    """Get every review for user"""
    return db.query(Review).filter(
        Review.user_id == user_id
    ).order_by(Review.date, Review.id).all()

def get_pending_reviews(db: Session, user_id: str, content_id: Optional[str] = None) -> List[Review]:
    """Get pending reviews for user, optionally for one content"""
    query = db.query(Review).filter(
        Review.user_id == user_id,
        Review.status == ReviewStatus.PENDING
    )
    if content_id is not None:
        query = query.filter(Review.content_id == content_id)
    return query.order_by(Review.date, Review.id).all()

def get_reviews_between(db: Session, user_id: str, start: date, end: date) -> List[Review]:
    """Get pending reviews scheduled in [start, end]"""
    return db.query(Review).filter(
        Review.user_id == user_id,
        Review.status == ReviewStatus.PENDING,
        Review.date >= start,
        Review.date <= end
    ).order_by(Review.date, Review.id).all()

def get_review(db: Session, user_id: str, review_id: str) -> Optional[Review]:
    return db.query(Review).filter(
        Review.user_id == user_id,
        Review.id == review_id
    ).first()

def insert_reviews(db: Session, reviews: List[Review]) -> List[Review]:
    db.add_all(reviews)
    db.flush()
    return reviews

def bulk_update_reviews(db: Session, reviews: List[Review]) -> int:
    """Write changed scheduling fields of the given reviews"""
    if not reviews:
        return 0
    # Rows are session-bound; the flush writes only the attributes that changed
    db.add_all(reviews)
    db.flush()
    return len(reviews)

def update_review_status(
    db: Session,
    review: Review,
    status: ReviewStatus,
    feedback: Optional[ReviewFeedback] = None
) -> Review:
    review.status = status
    if feedback is not None:
        review.feedback = feedback
    db.flush()
    return review

def delete_pending_reviews(db: Session, content_id: str) -> int:
    """Delete the pending reviews of a content; completed ones stay"""
    pending = db.query(Review).filter(
        Review.content_id == content_id,
        Review.status == ReviewStatus.PENDING
    ).all()
    for review in pending:
        db.delete(review)
    db.flush()
    return len(pending)
