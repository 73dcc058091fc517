"""
Analytics and feedback Pydantic schemas
"""

from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, EmailStr, Field

from .common import PartialUpdate, UtcDatetime

class AttendeeData(BaseModel):
    """Raw attendance numbers collected after an event"""
    total_attendees: int = Field(..., ge=0)
    average_time_spent: float = Field(..., ge=0)  # minutes
    interactions: int = Field(0, ge=0)
    max_concurrent_users: int = Field(0, ge=0)
    feedback_score: Optional[float] = Field(None, ge=0, le=5)

class AnalyticsCreate(BaseModel):
    """Schema for storing a precomputed analytics row"""
    attendee_count: int = Field(0, ge=0)
    engagement_score: int = Field(0, ge=0, le=100)
    average_attendance_time: float = Field(0, ge=0)
    max_concurrent_users: int = Field(0, ge=0)
    total_interactions: int = Field(0, ge=0)
    feedback_score: Optional[float] = Field(None, ge=0, le=5)
    analytics_date: Optional[UtcDatetime] = None
    detailed_metrics: Optional[Dict[str, Any]] = None

class AnalyticsUpdate(PartialUpdate):
    non_nullable = (
        "attendee_count",
        "engagement_score",
        "average_attendance_time",
        "max_concurrent_users",
        "total_interactions",
    )

    attendee_count: Optional[int] = Field(None, ge=0)
    engagement_score: Optional[int] = Field(None, ge=0, le=100)
    average_attendance_time: Optional[float] = Field(None, ge=0)
    max_concurrent_users: Optional[int] = Field(None, ge=0)
    total_interactions: Optional[int] = Field(None, ge=0)
    feedback_score: Optional[float] = Field(None, ge=0, le=5)
    detailed_metrics: Optional[Dict[str, Any]] = None

class AnalyticsResponse(BaseModel):
    id: int
    event_id: int
    attendee_count: int
    engagement_score: int
    average_attendance_time: float
    max_concurrent_users: int
    total_interactions: int
    feedback_score: Optional[float] = None
    analytics_date: datetime
    detailed_metrics: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class FeedbackCreate(BaseModel):
    """Attendee feedback submission"""
    attendee_name: Optional[str] = None
    attendee_email: Optional[EmailStr] = None
    overall_rating: int = Field(..., ge=1, le=5)
    content_rating: Optional[int] = Field(None, ge=1, le=5)
    technical_rating: Optional[int] = Field(None, ge=1, le=5)
    engagement_rating: Optional[int] = Field(None, ge=1, le=5)
    would_recommend: bool = False
    comments: Optional[str] = None

class FeedbackResponse(BaseModel):
    id: int
    event_id: int
    attendee_name: Optional[str] = None
    attendee_email: Optional[str] = None
    overall_rating: int
    content_rating: Optional[int] = None
    technical_rating: Optional[int] = None
    engagement_rating: Optional[int] = None
    would_recommend: bool
    comments: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class FeedbackSummary(BaseModel):
    average_overall_rating: float
    average_content_rating: float
    average_technical_rating: float
    average_engagement_rating: float
    recommendation_percentage: float
    total_feedback_count: int
