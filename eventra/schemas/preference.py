"""
User preference, planning tip, sharing and view schemas
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

class PreferenceUpdate(BaseModel):
    """Partial update of the caller's preferences"""
    preferred_themes: Optional[List[str]] = None
    preferred_event_types: Optional[List[str]] = None
    notifications_enabled: Optional[bool] = None
    onboarding_completed: Optional[bool] = None

class PreferenceResponse(BaseModel):
    user_id: str
    preferred_themes: List[str] = []
    preferred_event_types: List[str] = []
    notifications_enabled: bool = True
    onboarding_completed: bool = False
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PlanningTipResponse(BaseModel):
    id: int
    title: str
    description: str
    category: str
    icon: str

    class Config:
        from_attributes = True

class ShareCreate(BaseModel):
    platform: str = "direct"
    share_type: str = "link"

class ViewCreate(BaseModel):
    """A visit to the public share page"""
    event_id: int
    referrer: str = Field("direct", min_length=1, max_length=100)
