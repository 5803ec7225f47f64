from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional
import datetime as _dt
from datetime import date

from planner.enums import (
    Difficulty, ExceptionType, PaceMode, StudyStage, SuggestionIcon
)
from planner.exceptions import EmptyIntervalTable

class UserCreate(BaseModel):
    """Schema for registering a user"""
    email: str
    name: str
    goal: Optional[str] = None
    stage: Optional[StudyStage] = None

class ContentCreate(BaseModel):
    """Schema for logging a studied topic"""
    subject_id: str
    topic: str = Field(min_length=1)
    date_studied: date
    difficulty: Difficulty

class ContentUpdate(BaseModel):
    """Schema for editing a studied topic; unset fields are left alone"""
    subject_id: Optional[str] = None
    topic: Optional[str] = Field(default=None, min_length=1)
    date_studied: Optional[date] = None
    difficulty: Optional[Difficulty] = None

class ReviewIntervalsSchema(BaseModel):
    """Schema for a per-user interval table; every difficulty needs offsets"""
    easy: List[int]
    medium: List[int]
    hard: List[int]

    @field_validator("easy", "medium", "hard")
    @classmethod
    def offsets_not_empty(cls, value: List[int], info) -> List[int]:
        if not value:
            raise EmptyIntervalTable(info.field_name)
        if any(days < 0 for days in value):
            raise ValueError("interval offsets must be non-negative")
        return sorted(value)

    def as_table(self) -> Dict[str, List[int]]:
        return self.model_dump()

class DayExceptionCreate(BaseModel):
    """Schema for a one-off capacity override"""
    date: date
    type: ExceptionType
    capacity_multiplier: float = Field(ge=0)

class DayLoad(BaseModel):
    """Scheduled load against capacity for one day"""
    date: date
    review_count: int
    load: float
    capacity: float

class SuggestedAction(BaseModel):
    """Next thing the user should do, as plain data tags"""
    key: str
    route: str
    action: Optional[str] = None
    date: Optional[_dt.date] = None
    count: int = 0
    priority: int
    icon: SuggestionIcon

class CapacitySettings(BaseModel):
    """Capacity-related part of the user settings"""
    daily_limit: int = Field(ge=0)
    pace_mode: PaceMode = PaceMode.NORMAL
    heavy_days: List[int] = Field(default_factory=list)

    @field_validator("heavy_days")
    @classmethod
    def valid_weekdays(cls, value: List[int]) -> List[int]:
        if any(day < 0 or day > 6 for day in value):
            raise ValueError("heavy days must be weekday indices 0-6 (0=Sunday)")
        return sorted(set(value))
