"""
Guest-related Pydantic schemas
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field

GuestStatus = Literal["invited", "confirmed", "declined"]

class GuestCreate(BaseModel):
    """Schema for creating a guest"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    status: GuestStatus = "invited"

class GuestUpdate(BaseModel):
    """Schema for updating a guest"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    status: Optional[GuestStatus] = None

class GuestResponse(BaseModel):
    """Guest response schema"""
    id: int
    event_id: int
    name: str
    email: str
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class GuestStats(BaseModel):
    """RSVP breakdown for an event"""
    total: int
    invited: int
    confirmed: int
    declined: int
    response_rate: int
