from sqlalchemy import Column, String, DateTime, ForeignKey, Enum
from datetime import datetime
from planner.database import Base, generate_id
from planner.enums import RetentionEventType

class RetentionEvent(Base):
    """Append-only audit record of self-reported recall"""
    __tablename__ = "retention_events"
    
    id = Column(String(32), primary_key=True, default=generate_id)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content_id = Column(String(32), nullable=False, index=True)  # kept after the content is deleted
    type = Column(Enum(RetentionEventType, native_enum=False), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
