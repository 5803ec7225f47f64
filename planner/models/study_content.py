from sqlalchemy import Column, String, Date, ForeignKey, Enum
from sqlalchemy.orm import relationship
from planner.database import Base, generate_id
from planner.enums import Difficulty

class StudyContent(Base):
    """A studied topic; owns its scheduled reviews"""
    __tablename__ = "study_contents"
    
    id = Column(String(32), primary_key=True, default=generate_id)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(String(32), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False)
    topic = Column(String, nullable=False)
    date_studied = Column(Date, nullable=False)
    difficulty = Column(Enum(Difficulty, native_enum=False), nullable=False)
    
    subject = relationship("Subject", back_populates="contents")
    reviews = relationship("Review", back_populates="content", cascade="all, delete-orphan")
