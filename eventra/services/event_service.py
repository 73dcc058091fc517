"""
Event CRUD, cloning and team management
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from eventra.core.config import settings
from eventra.core.errors import (
    DuplicateError,
    LimitReachedError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from eventra.models import Event, EventTeamMember, EventVendor, Guest, Task
from eventra.schemas.event import EventCloneRequest, EventCreate, EventUpdate, TeamMemberCreate
from eventra.utils.security import AuthUser

logger = logging.getLogger(__name__)

class EventService:
    """Service for event operations"""

    @staticmethod
    def list_events(
        db: Session,
        user: AuthUser,
        status: Optional[str] = None,
        event_type: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
        user_id: Optional[str] = None
    ) -> Tuple[List[Event], int]:
        """List events owned by (or shared with) a user, newest first"""
        target_user = user_id or user.id
        if target_user != user.id and not user.is_admin:
            raise PermissionDeniedError("You do not have permission to view these events")

        query = db.query(Event)
        if target_user == user.id:
            team_event_ids = db.query(EventTeamMember.event_id).filter(
                EventTeamMember.user_id == user.id
            )
            query = query.filter(or_(Event.owner_id == user.id, Event.id.in_(team_event_ids)))
        else:
            query = query.filter(Event.owner_id == target_user)

        if status:
            query = query.filter(Event.status == status)
        if event_type:
            query = query.filter(Event.type == event_type)

        total = query.count()
        events = query.order_by(Event.created_at.desc(), Event.id.desc()).offset(offset).limit(limit).all()
        return events, total

    @staticmethod
    def check_event_limit(db: Session, user: AuthUser) -> None:
        """Enforce the per-tier cap on owned events"""
        if user.is_admin:
            return

        tier = user.subscription_tier or "free"
        limit = settings.TIER_EVENT_LIMITS.get(tier, settings.TIER_EVENT_LIMITS["free"])
        if limit is None:
            return

        owned = db.query(Event).filter(Event.owner_id == user.id).count()
        if owned >= limit:
            raise LimitReachedError(
                "Event limit reached",
                details=(
                    f"Your {tier} plan allows a maximum of {limit} events. "
                    "Please upgrade your subscription to create more events."
                )
            )

    @staticmethod
    def create_event(db: Session, user: AuthUser, event_data: EventCreate) -> Event:
        EventService.check_event_limit(db, user)
        if event_data.end_date and event_data.end_date < event_data.date:
            raise ValidationFailedError("End date cannot be before the start date")

        event = Event(owner_id=user.id, **event_data.model_dump())
        db.add(event)
        db.commit()
        db.refresh(event)

        logger.info(f"Event {event.id} created by {user.id}")
        return event

    @staticmethod
    def get_event_detail(db: Session, event: Event) -> Dict:
        """Event fields plus guest, task and vendor counts"""
        total_guests = db.query(Guest).filter(Guest.event_id == event.id).count()
        confirmed_guests = db.query(Guest).filter(
            Guest.event_id == event.id,
            Guest.status == "confirmed"
        ).count()
        total_tasks = db.query(Task).filter(Task.event_id == event.id).count()
        completed_tasks = db.query(Task).filter(
            Task.event_id == event.id,
            Task.status == "completed"
        ).count()
        total_vendors = db.query(EventVendor).filter(EventVendor.event_id == event.id).count()

        return {
            "total_guests": total_guests,
            "confirmed_guests": confirmed_guests,
            "total_tasks": total_tasks,
            "completed_tasks": completed_tasks,
            "total_vendors": total_vendors,
        }

    @staticmethod
    def update_event(db: Session, event: Event, event_update: EventUpdate) -> Event:
        changes = event_update.model_dump(exclude_unset=True)

        start = changes.get("date") or event.date
        end = changes.get("end_date", event.end_date)
        if end and start and end < start:
            raise ValidationFailedError("End date cannot be before the start date")

        for field, value in changes.items():
            setattr(event, field, value)
        event.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(event)
        return event

    @staticmethod
    def delete_event(db: Session, event: Event) -> None:
        event_id = event.id
        db.delete(event)
        db.commit()
        logger.info(f"Event {event_id} deleted")

    @staticmethod
    def clone_event(
        db: Session,
        source: Event,
        user: AuthUser,
        options: EventCloneRequest
    ) -> Tuple[Event, Dict[str, int]]:
        """Copy an event, optionally with its tasks and vendor links"""
        EventService.check_event_limit(db, user)

        clone = Event(
            owner_id=user.id,
            name=options.new_name or f"Copy of {source.name}",
            type=source.type,
            format=source.format,
            date=options.new_date or source.date,
            end_date=source.end_date if not options.new_date else None,
            location=source.location,
            estimated_guests=source.estimated_guests,
            description=source.description,
            status="planning",
            theme=source.theme,
            budget=source.budget,
        )
        db.add(clone)
        db.flush()

        copied = {"tasks": 0, "vendors": 0}

        if options.include_tasks:
            for task in db.query(Task).filter(Task.event_id == source.id).all():
                db.add(Task(
                    event_id=clone.id,
                    title=task.title,
                    description=task.description,
                    status="pending",
                    priority=task.priority,
                    category=task.category,
                    due_date=task.due_date,
                    assigned_to=task.assigned_to,
                ))
                copied["tasks"] += 1

        if options.include_vendors:
            for link in db.query(EventVendor).filter(EventVendor.event_id == source.id).all():
                db.add(EventVendor(
                    event_id=clone.id,
                    vendor_id=link.vendor_id,
                    status=link.status,
                    budget=link.budget,
                    notes=link.notes,
                ))
                copied["vendors"] += 1

        db.commit()
        db.refresh(clone)

        logger.info(f"Event {source.id} cloned into {clone.id} ({copied})")
        return clone, copied

    # -------- Team --------

    @staticmethod
    def list_team(db: Session, event_id: int) -> List[EventTeamMember]:
        return db.query(EventTeamMember).filter(
            EventTeamMember.event_id == event_id
        ).order_by(EventTeamMember.created_at).all()

    @staticmethod
    def add_team_member(db: Session, event: Event, member_data: TeamMemberCreate) -> EventTeamMember:
        if member_data.user_id == event.owner_id:
            raise ValidationFailedError("The event owner is already part of the team")

        existing = db.query(EventTeamMember).filter(
            EventTeamMember.event_id == event.id,
            EventTeamMember.user_id == member_data.user_id
        ).first()
        if existing:
            raise DuplicateError("User is already a member of this event team")

        member = EventTeamMember(event_id=event.id, user_id=member_data.user_id, role=member_data.role)
        db.add(member)
        db.commit()
        db.refresh(member)
        return member

    @staticmethod
    def remove_team_member(db: Session, event: Event, user_id: str) -> None:
        member = db.query(EventTeamMember).filter(
            EventTeamMember.event_id == event.id,
            EventTeamMember.user_id == user_id
        ).first()
        if not member:
            raise NotFoundError("Team member")

        db.delete(member)
        db.commit()
