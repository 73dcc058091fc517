"""
User preference and planning tip routes
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from eventra.core.db import get_db
from eventra.schemas.preference import PlanningTipResponse, PreferenceResponse, PreferenceUpdate
from eventra.services.preference_service import PreferenceService
from eventra.utils.responses import serialize_many, success_response
from eventra.utils.security import AuthUser, get_current_user

router = APIRouter()

@router.get("/users/preferences")
async def get_preferences(
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    preferences = PreferenceResponse(**PreferenceService.get_preferences(db, user))
    return success_response(message="Preferences retrieved", data=preferences.model_dump(mode="json"))

@router.put("/users/preferences")
async def update_preferences(
    preference_update: PreferenceUpdate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Create or update the caller's preferences"""
    preferences = PreferenceResponse(**PreferenceService.upsert_preferences(db, user, preference_update))
    return success_response(message="Preferences saved", data=preferences.model_dump(mode="json"))

@router.get("/planning-tips")
async def list_planning_tips(
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    tips = PreferenceService.list_planning_tips(db, category)
    return success_response(message="Planning tips retrieved", data=serialize_many(PlanningTipResponse, tips))
