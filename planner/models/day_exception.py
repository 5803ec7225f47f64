from sqlalchemy import Column, String, Float, Date, ForeignKey, Enum, UniqueConstraint
from planner.database import Base, generate_id
from planner.enums import ExceptionType

class DayException(Base):
    """One-off capacity override for a single calendar date"""
    __tablename__ = "day_exceptions"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_day_exception_user_date"),
    )
    
    id = Column(String(32), primary_key=True, default=generate_id)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    type = Column(Enum(ExceptionType, native_enum=False), nullable=False)
    capacity_multiplier = Column(Float, nullable=False)
