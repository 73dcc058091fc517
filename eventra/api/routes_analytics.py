"""
Analytics, dashboard and attendee feedback routes
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from eventra.core.db import get_db
from eventra.core.errors import NotFoundError
from eventra.models import Event
from eventra.schemas.analytics import (
    AnalyticsCreate,
    AnalyticsResponse,
    AnalyticsUpdate,
    AttendeeData,
    FeedbackCreate,
    FeedbackResponse,
    FeedbackSummary,
)
from eventra.services.access_service import AccessService
from eventra.services.analytics_service import AnalyticsService
from eventra.utils.responses import serialize, serialize_many, success_response
from eventra.utils.security import AuthUser, enforce_rate_limit, get_current_user

router = APIRouter()

@router.get("/analytics/overview")
async def get_dashboard_overview(
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Totals across every event the caller can access"""
    return success_response(message="Dashboard overview retrieved", data=AnalyticsService.get_dashboard_overview(db, user))

@router.get("/events/{event_id}/analytics")
async def list_event_analytics(
    event_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.get_accessible_event(db, event_id, user)
    rows = AnalyticsService.list_analytics(db, event.id)
    return success_response(message="Analytics retrieved", data=serialize_many(AnalyticsResponse, rows))

@router.post("/events/{event_id}/analytics")
async def generate_event_analytics(
    event_id: int,
    attendee_data: AttendeeData,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Compute the engagement score from attendance numbers"""
    event = AccessService.get_accessible_event(db, event_id, user)
    analytics = AnalyticsService.generate_event_analytics(db, event, attendee_data)
    return success_response(
        message="Analytics generated",
        data=serialize(AnalyticsResponse, analytics),
        status_code=201
    )

@router.post("/events/{event_id}/analytics/raw")
async def create_event_analytics(
    event_id: int,
    analytics_data: AnalyticsCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Store precomputed analytics as-is"""
    event = AccessService.get_accessible_event(db, event_id, user)
    analytics = AnalyticsService.create_analytics(db, event.id, analytics_data)
    return success_response(
        message="Analytics created",
        data=serialize(AnalyticsResponse, analytics),
        status_code=201
    )

@router.put("/analytics/{analytics_id}")
async def update_analytics(
    analytics_id: int,
    analytics_update: AnalyticsUpdate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    analytics = AnalyticsService.get_analytics(db, analytics_id)
    try:
        AccessService.get_accessible_event(db, analytics.event_id, user)
    except NotFoundError:
        raise NotFoundError("Analytics data")

    analytics = AnalyticsService.update_analytics(db, analytics, analytics_update)
    return success_response(message="Analytics updated", data=serialize(AnalyticsResponse, analytics))

# -------- Feedback --------

@router.post("/events/{event_id}/feedback")
async def submit_feedback(
    event_id: int,
    feedback_data: FeedbackCreate,
    request: Request,
    db: Session = Depends(get_db)
):
    """Anonymous attendee feedback"""
    enforce_rate_limit(request, bucket="feedback")

    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFoundError("Event")

    feedback = AnalyticsService.submit_feedback(db, event.id, feedback_data)
    return success_response(
        message="Thank you for your feedback",
        data=serialize(FeedbackResponse, feedback),
        status_code=201
    )

@router.get("/events/{event_id}/feedback")
async def list_feedback(
    event_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.require_event_owner(db, event_id, user)
    feedback = AnalyticsService.list_feedback(db, event.id)
    return success_response(message="Feedback retrieved", data=serialize_many(FeedbackResponse, feedback))

@router.get("/events/{event_id}/feedback/summary")
async def get_feedback_summary(
    event_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.require_event_owner(db, event_id, user)
    summary = FeedbackSummary(**AnalyticsService.get_feedback_summary(db, event.id))
    return success_response(message="Feedback summary retrieved", data=summary.model_dump())
