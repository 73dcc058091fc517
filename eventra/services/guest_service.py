"""
Guest list management and RSVP statistics
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from eventra.core.errors import DuplicateError, NotFoundError
from eventra.models import Event, Guest
from eventra.schemas.guest import GuestCreate, GuestUpdate
from eventra.services.access_service import AccessService
from eventra.services.analytics_service import round_half_up
from eventra.utils.security import AuthUser

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Guest with this email already exists for this event"

class GuestService:
    """Service for guest operations"""

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    @staticmethod
    def email_taken(
        db: Session,
        event_id: int,
        email: str,
        exclude_guest_id: Optional[int] = None
    ) -> bool:
        """Check whether an email is already on this event's guest list"""
        query = db.query(Guest).filter(
            Guest.event_id == event_id,
            func.lower(Guest.email) == GuestService.normalize_email(email)
        )
        if exclude_guest_id:
            query = query.filter(Guest.id != exclude_guest_id)
        return query.first() is not None

    @staticmethod
    def list_guests(
        db: Session,
        event_id: int,
        status: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[Guest]:
        query = db.query(Guest).filter(Guest.event_id == event_id)
        if status:
            query = query.filter(Guest.status == status)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(or_(
                func.lower(Guest.name).like(pattern),
                func.lower(Guest.email).like(pattern)
            ))
        return query.order_by(Guest.created_at.desc(), Guest.id.desc()).all()

    @staticmethod
    def get_guest_for_user(db: Session, guest_id: int, user: AuthUser) -> Tuple[Guest, Event]:
        guest = db.query(Guest).filter(Guest.id == guest_id).first()
        if not guest:
            raise NotFoundError("Guest")

        try:
            event = AccessService.get_accessible_event(db, guest.event_id, user)
        except NotFoundError:
            raise NotFoundError("Guest")
        return guest, event

    @staticmethod
    def create_guest(db: Session, event_id: int, guest_data: GuestCreate) -> Guest:
        if GuestService.email_taken(db, event_id, guest_data.email):
            raise DuplicateError(DUPLICATE_EMAIL_MESSAGE)

        guest = Guest(
            event_id=event_id,
            name=guest_data.name.strip(),
            email=GuestService.normalize_email(guest_data.email),
            status=guest_data.status
        )
        db.add(guest)
        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def update_guest(db: Session, guest: Guest, guest_update: GuestUpdate) -> Guest:
        changes = guest_update.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in changes:
            if GuestService.email_taken(db, guest.event_id, changes["email"], exclude_guest_id=guest.id):
                raise DuplicateError(DUPLICATE_EMAIL_MESSAGE)
            changes["email"] = GuestService.normalize_email(changes["email"])

        for field, value in changes.items():
            setattr(guest, field, value)
        guest.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def delete_guest(db: Session, guest: Guest) -> None:
        db.delete(guest)
        db.commit()

    @staticmethod
    def get_guest_stats(db: Session, event_id: int) -> Dict[str, int]:
        """Counts per RSVP status and the share of guests who answered"""
        rows = db.query(
            Guest.status,
            func.count(Guest.id)
        ).filter(Guest.event_id == event_id).group_by(Guest.status).all()

        counts = {status: count for status, count in rows}
        total = sum(counts.values())
        confirmed = counts.get("confirmed", 0)
        declined = counts.get("declined", 0)

        response_rate = round_half_up((confirmed + declined) / total * 100) if total else 0

        return {
            "total": total,
            "invited": counts.get("invited", 0),
            "confirmed": confirmed,
            "declined": declined,
            "response_rate": response_rate,
        }
