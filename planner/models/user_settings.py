from sqlalchemy import Boolean, Column, Integer, String, ForeignKey, JSON, Enum
from sqlalchemy.orm import relationship
from planner.database import Base
from planner.enums import PaceMode

class UserSettings(Base):
    """Per-user capacity and interval preferences"""
    __tablename__ = "user_settings"
    
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    daily_limit = Column(Integer, nullable=False, default=5)  # effort points per day
    review_intervals = Column(JSON, nullable=False)  # {"easy": [14, 60], ...}
    pace_mode = Column(Enum(PaceMode, native_enum=False), nullable=False, default=PaceMode.NORMAL)
    heavy_days = Column(JSON, nullable=False, default=list)  # weekday indices, 0=Sunday
    setup_completed = Column(Boolean, nullable=False, default=False)
    checklist = Column(JSON, nullable=False, default=dict)
    
    user = relationship("User", back_populates="settings")
