"""
Event sharing: share tracking, the public event page and its view counts
"""

import hashlib
import logging
from typing import Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from eventra.core.errors import NotFoundError
from eventra.models import Event, EventShare, EventView
from eventra.schemas.preference import ShareCreate, ViewCreate
from eventra.services.qr_service import QRService
from eventra.utils.security import AuthUser

logger = logging.getLogger(__name__)

def hash_ip(ip: str) -> str:
    """Short one-way digest so raw visitor addresses are never stored"""
    return hashlib.sha256(ip.encode("utf-8")).hexdigest()[:16]

class ShareService:
    """Service for recording and counting event shares and views"""

    @staticmethod
    def record_share(db: Session, event_id: int, user: AuthUser, share_data: ShareCreate) -> Dict:
        share = EventShare(
            event_id=event_id,
            user_id=user.id,
            platform=share_data.platform.lower(),
            share_type=share_data.share_type.lower(),
        )
        db.add(share)
        db.commit()

        logger.info(f"Event {event_id} shared on {share.platform} by {user.id}")
        return ShareService.get_share_stats(db, event_id)

    @staticmethod
    def get_share_stats(db: Session, event_id: int) -> Dict:
        rows = db.query(EventShare.platform, func.count(EventShare.id)).filter(
            EventShare.event_id == event_id
        ).group_by(EventShare.platform).all()
        by_platform = {platform: count for platform, count in rows}

        view_rows = db.query(EventView.referrer, func.count(EventView.id)).filter(
            EventView.event_id == event_id
        ).group_by(EventView.referrer).all()
        by_referrer = {referrer: count for referrer, count in view_rows}

        return {
            "event_id": event_id,
            "total_shares": sum(by_platform.values()),
            "by_platform": by_platform,
            "total_views": sum(by_referrer.values()),
            "views_by_referrer": by_referrer,
            "share_url": QRService.get_share_url(event_id),
            "public_api_url": QRService.get_public_api_url(event_id),
        }

    # -------- Public page --------

    @staticmethod
    def get_public_event(db: Session, event_id: int) -> Event:
        """Shared events are visible to anyone once they leave draft"""
        event = db.query(Event).filter(Event.id == event_id).first()
        if not event or event.status == "draft":
            raise NotFoundError("Event")
        return event

    @staticmethod
    def record_view(
        db: Session,
        view_data: ViewCreate,
        client_ip: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> Dict:
        event = ShareService.get_public_event(db, view_data.event_id)

        view = EventView(
            event_id=event.id,
            referrer=view_data.referrer.lower(),
            ip_hash=hash_ip(client_ip) if client_ip else None,
            user_agent=(user_agent or "")[:255],
        )
        db.add(view)
        db.commit()

        total_views = db.query(EventView).filter(EventView.event_id == event.id).count()
        return {"event_id": event.id, "total_views": total_views}
