"""
Event ownership and collaboration checks
"""

from sqlalchemy.orm import Session

from eventra.core.errors import NotFoundError, PermissionDeniedError
from eventra.models import Event, EventTeamMember
from eventra.utils.security import AuthUser

class AccessService:
    """Resolves events the caller is allowed to touch"""

    @staticmethod
    def is_team_member(db: Session, event_id: int, user_id: str) -> bool:
        return db.query(EventTeamMember).filter(
            EventTeamMember.event_id == event_id,
            EventTeamMember.user_id == user_id
        ).first() is not None

    @staticmethod
    def get_accessible_event(db: Session, event_id: int, user: AuthUser) -> Event:
        """Return the event for its owner, a team member or an admin.

        Anyone else gets the same 404 as for a missing event.
        """
        event = db.query(Event).filter(Event.id == event_id).first()
        if event and (
            user.is_admin
            or event.owner_id == user.id
            or AccessService.is_team_member(db, event_id, user.id)
        ):
            return event
        raise NotFoundError("Event", "Event not found or unauthorized access")

    @staticmethod
    def require_event_owner(db: Session, event_id: int, user: AuthUser) -> Event:
        """Return the event only for its owner or an admin"""
        event = AccessService.get_accessible_event(db, event_id, user)
        if event.owner_id != user.id and not user.is_admin:
            raise PermissionDeniedError("Only the event owner can perform this action")
        return event

    @staticmethod
    def is_owner(event: Event, user: AuthUser) -> bool:
        return event.owner_id == user.id or user.is_admin
