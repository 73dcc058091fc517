"""
AI planning assistant routes - authenticated and rate limited
"""

import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from eventra.core.config import settings
from eventra.core.db import get_db
from eventra.core.errors import ValidationFailedError
from eventra.models import Guest
from eventra.schemas.ai import (
    BudgetRequest,
    ChecklistRequest,
    ImproveEventRequest,
    SuggestionRequest,
    TimelineRequest,
    VendorSuggestionRequest,
)
from eventra.schemas.task import TaskResponse
from eventra.schemas.vendor import VendorResponse
from eventra.services.access_service import AccessService
from eventra.services.ai_service import SOURCE_RULES, ai_service
from eventra.services.realtime_service import broadcaster
from eventra.services.task_service import TaskService
from eventra.services.timeline_service import TimelineService
from eventra.services.vendor_service import VendorService
from eventra.utils.responses import serialize, success_response
from eventra.utils.security import AuthUser, enforce_rate_limit, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()

def ai_rate_limit(request: Request):
    enforce_rate_limit(request, limit=settings.AI_RATE_LIMIT_PER_MINUTE, bucket="ai")

@router.post("/suggestions", dependencies=[Depends(ai_rate_limit)])
async def generate_suggestions(
    suggestion_request: SuggestionRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Event ideas, themes, tasks and budget split for an event type"""
    preferences = suggestion_request.preferences.model_dump(exclude_none=True) if suggestion_request.preferences else {}
    suggestions = await ai_service.generate_suggestions(
        event_type=suggestion_request.event_type,
        theme=suggestion_request.theme,
        budget=suggestion_request.budget,
        preferences=preferences,
        personal_context=ai_service.build_personal_context(db, user)
    )
    ai_service.record_request(
        db, user, "suggestions", suggestions["source"],
        input_data=suggestion_request.model_dump(mode="json")
    )
    return success_response(message="Suggestions generated", data=suggestions)

@router.post("/budget", dependencies=[Depends(ai_rate_limit)])
async def generate_budget(
    budget_request: BudgetRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Split a total budget into categories"""
    guest_count = budget_request.guest_count
    if budget_request.event_id is not None:
        event = AccessService.get_accessible_event(db, budget_request.event_id, user)
        guest_count = guest_count or event.estimated_guests

    budget = await ai_service.generate_budget(
        budget_request.event_type,
        budget_request.total_budget,
        guest_count
    )
    ai_service.record_request(
        db, user, "budget", budget["source"],
        input_data=budget_request.model_dump(mode="json"),
        event_id=budget_request.event_id
    )
    return success_response(message="Budget generated", data=budget)

@router.post("/improve-event", dependencies=[Depends(ai_rate_limit)])
async def improve_event(
    improve_request: ImproveEventRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Improvement ideas for an existing event"""
    event = AccessService.get_accessible_event(db, improve_request.event_id, user)
    tasks = TaskService.list_tasks(db, event.id)
    guest_count = db.query(Guest).filter(Guest.event_id == event.id).count()

    result = await ai_service.improve_event(event, tasks, guest_count)
    ai_service.record_request(
        db, user, "improvements", result["source"],
        input_data={"event_id": event.id},
        event_id=event.id
    )
    return success_response(message="Improvements generated", data=result)

@router.post("/checklist", dependencies=[Depends(ai_rate_limit)])
async def generate_checklist(
    checklist_request: ChecklistRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Planning checklist, optionally saved as tasks on an event"""
    event = None
    if checklist_request.event_id is not None:
        event = AccessService.get_accessible_event(db, checklist_request.event_id, user)
    elif checklist_request.create_tasks:
        raise ValidationFailedError("event_id is required to create tasks")

    event_type = checklist_request.event_type or (event.type if event else None)
    if not event_type:
        raise ValidationFailedError("event_type or event_id is required")

    event_date = checklist_request.event_date or (event.date if event else None)
    checklist = await ai_service.generate_checklist(event_type, event_date, checklist_request.extra_requirements)

    if checklist_request.create_tasks:
        created = ai_service.create_checklist_tasks(db, event, checklist["tasks"])
        checklist["created_tasks"] = [serialize(TaskResponse, task) for task in created]
        for task_data in checklist["created_tasks"]:
            await broadcaster.task_created(event.id, task_data)

    ai_service.record_request(
        db, user, "checklist", checklist["source"],
        input_data=checklist_request.model_dump(mode="json"),
        event_id=checklist_request.event_id
    )
    return success_response(message="Checklist generated", data=checklist)

@router.post("/suggest-vendors", dependencies=[Depends(ai_rate_limit)])
async def suggest_vendors(
    vendor_request: VendorSuggestionRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Best approved vendors per category relevant to the event type"""
    if vendor_request.event_id is not None:
        AccessService.get_accessible_event(db, vendor_request.event_id, user)

    result = VendorService.suggest_vendors(
        db,
        vendor_request.event_type,
        preferences=vendor_request.preferences,
        location=vendor_request.location
    )
    suggested = {
        category: [{**serialize(VendorResponse, vendor), "score": score} for score, vendor in ranked]
        for category, ranked in result["grouped"].items()
    }

    ai_service.record_request(
        db, user, "vendors", SOURCE_RULES,
        input_data=vendor_request.model_dump(mode="json"),
        event_id=vendor_request.event_id
    )
    return success_response(
        message="Vendor suggestions generated",
        data={"suggested_vendors": suggested, "total_suggestions": result["total_suggestions"]}
    )

@router.post("/generate-timeline", dependencies=[Depends(ai_rate_limit)])
async def generate_timeline(
    timeline_request: TimelineRequest,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Event-day schedule for the given start and end times"""
    if timeline_request.event_id is not None:
        AccessService.get_accessible_event(db, timeline_request.event_id, user)

    timeline = TimelineService.generate_timeline(
        timeline_request.event_type,
        timeline_request.start_time,
        timeline_request.end_time,
        include_meals=timeline_request.include_meals,
        include_setup=timeline_request.include_setup,
        include_breaks=timeline_request.include_breaks,
        custom_activities=timeline_request.custom_activities
    )

    ai_service.record_request(
        db, user, "timeline", SOURCE_RULES,
        input_data=timeline_request.model_dump(mode="json"),
        event_id=timeline_request.event_id
    )
    return success_response(message="Timeline generated", data=timeline)


@router.get("/usage")
async def get_ai_usage(
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Counts of the caller's AI requests per type and source"""
    return success_response(message="AI usage retrieved", data=ai_service.get_usage(db, user))
