from sqlalchemy import Boolean, Column, String, DateTime, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
from planner.database import Base, generate_id
from planner.enums import StudyStage

class User(Base):
    """Student account owning every other planner entity"""
    __tablename__ = "users"
    
    id = Column(String(32), primary_key=True, default=generate_id)
    email = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    goal = Column(String)  # target course, e.g. "Medicine"
    stage = Column(Enum(StudyStage, native_enum=False))
    onboarding_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    
    settings = relationship("UserSettings", back_populates="user", uselist=False, cascade="all, delete-orphan")
    subjects = relationship("Subject", back_populates="user", cascade="all, delete-orphan")
