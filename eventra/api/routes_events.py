"""
Event API routes - requires authentication
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from eventra.core.db import get_db
from eventra.schemas.event import (
    EventCloneRequest,
    EventCreate,
    EventDetail,
    EventResponse,
    EventUpdate,
    TeamMemberCreate,
    TeamMemberResponse,
)
from eventra.schemas.preference import ShareCreate
from eventra.services.access_service import AccessService
from eventra.services.event_service import EventService
from eventra.services.qr_service import QRService
from eventra.services.realtime_service import broadcaster
from eventra.services.share_service import ShareService
from eventra.utils.responses import serialize, serialize_many, success_response
from eventra.utils.security import AuthUser, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("")
async def list_events(
    status: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """List the caller's events, newest first"""
    events, total = EventService.list_events(
        db, user,
        status=status,
        event_type=type,
        limit=limit,
        offset=offset,
        user_id=user_id
    )
    return success_response(
        message="Events retrieved",
        data={
            "events": serialize_many(EventResponse, events),
            "pagination": {"limit": limit, "offset": offset, "total": total}
        }
    )

@router.post("")
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = EventService.create_event(db, user, event_data)
    return success_response(
        message="Event created successfully",
        data=serialize(EventResponse, event),
        status_code=201
    )

@router.get("/{event_id}")
async def get_event(
    event_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Event with guest, task and vendor counts"""
    event = AccessService.get_accessible_event(db, event_id, user)
    detail = EventDetail(
        **EventResponse.model_validate(event).model_dump(),
        **EventService.get_event_detail(db, event)
    )
    return success_response(message="Event details retrieved", data=detail.model_dump(mode="json"))

@router.put("/{event_id}")
async def update_event(
    event_id: int,
    event_update: EventUpdate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.get_accessible_event(db, event_id, user)
    event = EventService.update_event(db, event, event_update)

    data = serialize(EventResponse, event)
    await broadcaster.event_updated(event_id, data)

    return success_response(message="Event updated successfully", data=data)

@router.delete("/{event_id}", status_code=204)
async def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.require_event_owner(db, event_id, user)
    EventService.delete_event(db, event)
    return Response(status_code=204)

@router.post("/{event_id}/clone")
async def clone_event(
    event_id: int,
    options: Optional[EventCloneRequest] = None,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Copy an event with its tasks and vendor links"""
    source = AccessService.get_accessible_event(db, event_id, user)
    clone, copied = EventService.clone_event(db, source, user, options or EventCloneRequest())
    return success_response(
        message="Event cloned successfully",
        data={"event": serialize(EventResponse, clone), "copied": copied},
        status_code=201
    )

# -------- Team --------

@router.get("/{event_id}/team")
async def list_team(
    event_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.get_accessible_event(db, event_id, user)
    members = EventService.list_team(db, event.id)
    return success_response(
        message="Team retrieved",
        data={"owner_id": event.owner_id, "members": serialize_many(TeamMemberResponse, members)}
    )

@router.post("/{event_id}/team")
async def add_team_member(
    event_id: int,
    member_data: TeamMemberCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.require_event_owner(db, event_id, user)
    member = EventService.add_team_member(db, event, member_data)
    return success_response(
        message="Team member added",
        data=serialize(TeamMemberResponse, member),
        status_code=201
    )

@router.delete("/{event_id}/team/{member_user_id}", status_code=204)
async def remove_team_member(
    event_id: int,
    member_user_id: str,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.require_event_owner(db, event_id, user)
    EventService.remove_team_member(db, event, member_user_id)
    return Response(status_code=204)

# -------- Sharing --------

@router.post("/{event_id}/share")
async def share_event(
    event_id: int,
    share_data: Optional[ShareCreate] = None,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """Record a share and return the updated per-platform counts"""
    event = AccessService.get_accessible_event(db, event_id, user)
    stats = ShareService.record_share(db, event.id, user, share_data or ShareCreate())
    return success_response(message="Share recorded", data=stats, status_code=201)

@router.get("/{event_id}/share")
async def get_share_stats(
    event_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.get_accessible_event(db, event_id, user)
    return success_response(message="Share statistics retrieved", data=ShareService.get_share_stats(db, event.id))

@router.get("/{event_id}/qr")
async def get_event_qr(
    event_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    """PNG QR code of the event share link"""
    event = AccessService.get_accessible_event(db, event_id, user)
    qr_bytes = QRService.generate_event_qr(event.id)
    return Response(
        content=qr_bytes,
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename=event_{event.id}_qr.png"}
    )
