"""
Event-related Pydantic schemas
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field

from .common import PartialUpdate, UtcDatetime

EventFormat = Literal["virtual", "in-person", "hybrid"]
EventStatus = Literal["draft", "planning", "active", "completed", "cancelled"]

class EventCreate(BaseModel):
    """Schema for creating an event"""
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=50)
    format: EventFormat = "in-person"
    date: UtcDatetime
    end_date: Optional[UtcDatetime] = None
    location: Optional[str] = None
    estimated_guests: Optional[int] = Field(None, gt=0)
    description: Optional[str] = None
    status: EventStatus = "draft"
    theme: Optional[str] = None
    budget: Optional[int] = Field(None, ge=0)


class EventUpdate(PartialUpdate):
    """Schema for updating an event"""
    non_nullable = ("name", "type", "format", "date", "status")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    format: Optional[EventFormat] = None
    date: Optional[UtcDatetime] = None
    end_date: Optional[UtcDatetime] = None
    location: Optional[str] = None
    estimated_guests: Optional[int] = Field(None, gt=0)
    description: Optional[str] = None
    status: Optional[EventStatus] = None
    theme: Optional[str] = None
    budget: Optional[int] = Field(None, ge=0)


class EventResponse(BaseModel):
    """Basic event response"""
    id: int
    owner_id: str
    name: str
    type: str
    format: str
    date: datetime
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    estimated_guests: Optional[int] = None
    description: Optional[str] = None
    status: str
    theme: Optional[str] = None
    budget: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class EventDetail(EventResponse):
    """Detailed event response with counts"""
    total_guests: int
    confirmed_guests: int
    total_tasks: int
    completed_tasks: int
    total_vendors: int

class EventCloneRequest(BaseModel):
    """Options for cloning an event"""
    include_tasks: bool = True
    include_vendors: bool = True
    new_name: Optional[str] = None
    new_date: Optional[UtcDatetime] = None


class TeamMemberCreate(BaseModel):
    """Add a collaborator to an event"""
    user_id: str = Field(..., min_length=1, max_length=64)
    role: str = "editor"

class TeamMemberResponse(BaseModel):
    id: int
    event_id: int
    user_id: str
    role: str
    created_at: datetime

    class Config:
        from_attributes = True

class PublicEventResponse(BaseModel):
    """Fields of an event that anyone with the share link may see"""
    id: int
    name: str
    type: str
    format: str
    date: datetime
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    estimated_guests: Optional[int] = None
    description: Optional[str] = None
    status: str

    class Config:
        from_attributes = True
