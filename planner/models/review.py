from sqlalchemy import Column, String, Float, Date, ForeignKey, Enum, CheckConstraint
from sqlalchemy.orm import relationship
from planner.database import Base, generate_id
from planner.enums import ReviewStatus, ReviewFeedback

class Review(Base):
    """One scheduled recall event for a study content"""
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("window_start <= window_end", name="ck_review_window"),
    )
    
    id = Column(String(32), primary_key=True, default=generate_id)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content_id = Column(String(32), ForeignKey("study_contents.id", ondelete="CASCADE"), nullable=False, index=True)
    
    date = Column(Date, nullable=False)  # currently scheduled day, moved by the rebalancer
    status = Column(Enum(ReviewStatus, native_enum=False), nullable=False, default=ReviewStatus.PENDING)
    feedback = Column(Enum(ReviewFeedback, native_enum=False))  # set on completion only
    
    # Planner fields
    window_start = Column(Date, nullable=False)  # earliest acceptable day
    window_end = Column(Date, nullable=False)  # latest day without fallback
    effort = Column(Float, nullable=False)  # load cost (1.0, 1.3, 1.7)
    original_date = Column(Date, nullable=False)  # nominal day, to measure drift
    
    content = relationship("StudyContent", back_populates="reviews")
    
    def __repr__(self):
        return f"<Review {self.id} {self.date} {self.status.value if self.status else None} effort={self.effort}>"
