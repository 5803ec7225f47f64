from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from planner.database import Base, generate_id

DEFAULT_SUBJECT_COLOR = "#21B892"

class Subject(Base):
    """Subject grouping study contents"""
    __tablename__ = "subjects"
    
    id = Column(String(32), primary_key=True, default=generate_id)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    color = Column(String, nullable=False, default=DEFAULT_SUBJECT_COLOR)
    
    user = relationship("User", back_populates="subjects")
    contents = relationship("StudyContent", back_populates="subject", cascade="all, delete-orphan")
