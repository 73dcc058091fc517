"""
AI suggestion request schemas
"""

from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from .common import UtcDatetime

class SuggestionPreferences(BaseModel):
    guest_count: Optional[int] = Field(None, gt=0)
    format: Optional[str] = None
    duration: Optional[str] = None

class SuggestionRequest(BaseModel):
    """Request for event ideas, themes, tasks and budget splits"""
    event_type: str = Field(..., min_length=1)
    theme: Optional[str] = None
    budget: Optional[float] = Field(None, ge=0)
    preferences: Optional[SuggestionPreferences] = None

class BudgetRequest(BaseModel):
    event_type: str = Field(..., min_length=1)
    total_budget: float = Field(..., gt=0)
    guest_count: Optional[int] = Field(None, gt=0)
    event_id: Optional[int] = None

class ImproveEventRequest(BaseModel):
    event_id: int

class ChecklistRequest(BaseModel):
    event_type: Optional[str] = None
    event_id: Optional[int] = None
    event_date: Optional[UtcDatetime] = None
    create_tasks: bool = False
    extra_requirements: List[str] = []


class VendorSuggestionRequest(BaseModel):
    """Ranked directory vendors for an event type"""
    event_type: str = Field(..., min_length=1)
    event_id: Optional[int] = None
    guest_count: Optional[int] = Field(None, gt=0)
    budget: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    preferences: List[str] = []

class TimelineActivity(BaseModel):
    """A fixed slot the planner already knows about"""
    title: str = Field(..., min_length=1)
    start_time: UtcDatetime
    end_time: UtcDatetime
    type: str = "custom"
    description: Optional[str] = None
    location: Optional[str] = None

    @model_validator(mode="after")
    def check_order(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self

class TimelineRequest(BaseModel):
    event_type: str = Field(..., min_length=1)
    start_time: UtcDatetime
    end_time: UtcDatetime
    event_id: Optional[int] = None
    include_meals: bool = True
    include_setup: bool = True
    include_breaks: bool = True
    custom_activities: List[TimelineActivity] = []
