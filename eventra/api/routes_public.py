"""
Public API routes - no authentication required
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eventra.core.db import get_db
from eventra.schemas.event import PublicEventResponse
from eventra.schemas.preference import ViewCreate
from eventra.services.share_service import ShareService
from eventra.utils.responses import serialize, success_response
from eventra.utils.security import enforce_rate_limit, get_client_ip

logger = logging.getLogger(__name__)

router = APIRouter()

# Share links printed in QR codes live outside the /api prefix
page_router = APIRouter()

@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint with a database round trip"""
    try:
        db.execute(text("SELECT 1"))
        database = True
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database = False

    return {"status": "ok", "database": database}

@router.get("/events/shared/{event_id}")
async def get_shared_event(event_id: int, db: Session = Depends(get_db)):
    """Public fields of a shared event; drafts are not shared"""
    event = ShareService.get_public_event(db, event_id)
    return success_response(message="Event retrieved", data=serialize(PublicEventResponse, event))

@router.post("/events/shared/views")
async def track_shared_view(
    view_data: ViewCreate,
    request: Request,
    db: Session = Depends(get_db)
):
    """Count a visit to the public share page"""
    enforce_rate_limit(request, bucket="views")
    result = ShareService.record_view(
        db,
        view_data,
        client_ip=get_client_ip(request),
        user_agent=request.headers.get("user-agent")
    )
    return success_response(message="View tracked successfully", data=result)

@page_router.get("/events/share/{event_id}", include_in_schema=False)
async def open_share_link(event_id: int, db: Session = Depends(get_db)):
    event = ShareService.get_public_event(db, event_id)
    return RedirectResponse(url=f"/api/events/shared/{event.id}")
