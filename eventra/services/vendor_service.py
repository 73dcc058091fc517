"""
Vendor directory and event-vendor links
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from eventra.core.errors import DuplicateError, NotFoundError, PermissionDeniedError
from eventra.models import EventVendor, Vendor
from eventra.schemas.vendor import EventVendorCreate, EventVendorUpdate, VendorCreate, VendorUpdate
from eventra.utils.security import AuthUser

logger = logging.getLogger(__name__)

# Fields only admins may change on a vendor
ADMIN_ONLY_FIELDS = ("is_approved", "is_partner")

# Directory categories worth suggesting per event type
EVENT_VENDOR_CATEGORIES = {
    "wedding": ["catering", "photography", "venue", "florist", "music", "cake"],
    "corporate": ["venue", "catering", "av-equipment", "transportation"],
    "birthday": ["venue", "catering", "entertainment", "decoration"],
    "conference": ["venue", "catering", "av-equipment", "printing"],
    "festival": ["venue", "sound", "security", "catering", "stage"],
}

SUGGESTIONS_PER_CATEGORY = 3

class VendorService:
    """Service for vendor directory operations"""

    @staticmethod
    def can_manage(vendor: Vendor, user: Optional[AuthUser]) -> bool:
        return user is not None and (user.is_admin or vendor.owner_id == user.id)

    @staticmethod
    def list_vendors(
        db: Session,
        user: Optional[AuthUser],
        category: Optional[str] = None,
        is_partner: Optional[bool] = None,
        mine: bool = False
    ) -> List[Vendor]:
        """Approved vendors plus the caller's own, partners first"""
        query = db.query(Vendor)

        if mine and user:
            query = query.filter(Vendor.owner_id == user.id)
        elif user and user.is_admin:
            pass
        elif user:
            query = query.filter(or_(Vendor.is_approved == True, Vendor.owner_id == user.id))
        else:
            query = query.filter(Vendor.is_approved == True)

        if category:
            query = query.filter(Vendor.category == category)
        if is_partner is not None:
            query = query.filter(Vendor.is_partner == is_partner)

        return query.order_by(Vendor.is_partner.desc(), Vendor.name.asc()).all()

    @staticmethod
    def get_vendor(db: Session, vendor_id: int, user: Optional[AuthUser] = None) -> Vendor:
        """Unapproved vendors are only visible to their owner and admins"""
        vendor = db.query(Vendor).filter(Vendor.id == vendor_id).first()
        if not vendor or (not vendor.is_approved and not VendorService.can_manage(vendor, user)):
            raise NotFoundError("Vendor")
        return vendor

    @staticmethod
    def create_vendor(db: Session, user: AuthUser, vendor_data: VendorCreate) -> Vendor:
        vendor = Vendor(
            owner_id=user.id,
            is_approved=user.is_admin,
            is_partner=False,
            **vendor_data.model_dump()
        )
        db.add(vendor)
        db.commit()
        db.refresh(vendor)

        logger.info(f"Vendor {vendor.id} created by {user.id} (approved={vendor.is_approved})")
        return vendor

    @staticmethod
    def update_vendor(db: Session, vendor: Vendor, user: AuthUser, vendor_update: VendorUpdate) -> Vendor:
        if not VendorService.can_manage(vendor, user):
            raise PermissionDeniedError("Unauthorized to update this vendor")

        changes = vendor_update.model_dump(exclude_unset=True)
        if not user.is_admin:
            for field in ADMIN_ONLY_FIELDS:
                changes.pop(field, None)

        for field, value in changes.items():
            setattr(vendor, field, value)
        vendor.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(vendor)
        return vendor

    @staticmethod
    def delete_vendor(db: Session, vendor: Vendor, user: AuthUser) -> None:
        if not VendorService.can_manage(vendor, user):
            raise PermissionDeniedError("Unauthorized to delete this vendor")
        db.delete(vendor)
        db.commit()

    # -------- Event vendors --------

    @staticmethod
    def list_event_vendors(db: Session, event_id: int) -> List[EventVendor]:
        return db.query(EventVendor).options(joinedload(EventVendor.vendor)).filter(
            EventVendor.event_id == event_id
        ).order_by(EventVendor.created_at.desc(), EventVendor.id.desc()).all()

    @staticmethod
    def get_event_vendor(db: Session, event_id: int, vendor_id: int) -> EventVendor:
        link = db.query(EventVendor).filter(
            EventVendor.event_id == event_id,
            EventVendor.vendor_id == vendor_id
        ).first()
        if not link:
            raise NotFoundError("Vendor", "Vendor not found for this event")
        return link

    @staticmethod
    def add_vendor_to_event(db: Session, event_id: int, user: AuthUser, link_data: EventVendorCreate) -> EventVendor:
        VendorService.get_vendor(db, link_data.vendor_id, user)

        existing = db.query(EventVendor).filter(
            EventVendor.event_id == event_id,
            EventVendor.vendor_id == link_data.vendor_id
        ).first()
        if existing:
            raise DuplicateError("Vendor is already added to this event")

        link = EventVendor(event_id=event_id, **link_data.model_dump())
        db.add(link)
        db.commit()
        db.refresh(link)
        return link

    @staticmethod
    def update_event_vendor(db: Session, link: EventVendor, link_update: EventVendorUpdate) -> EventVendor:
        for field, value in link_update.model_dump(exclude_unset=True).items():
            setattr(link, field, value)
        db.commit()
        db.refresh(link)
        return link

    @staticmethod
    def remove_vendor_from_event(db: Session, link: EventVendor) -> None:
        db.delete(link)
        db.commit()

    # -------- Suggestions --------

    @staticmethod
    def score_vendor(vendor: Vendor, preferences: List[str], location: Optional[str] = None) -> float:
        """Partners and well rated vendors first; preference and location hits add points"""
        score = 20.0 if vendor.is_partner else 0.0
        if vendor.rating:
            score += vendor.rating * 10

        haystack = " ".join(filter(None, [vendor.name, vendor.category, vendor.description])).lower()
        for preference in preferences:
            if preference and preference.lower() in haystack:
                score += 10
        if location and location.lower() in haystack:
            score += 15
        return score

    @staticmethod
    def suggest_vendors(
        db: Session,
        event_type: str,
        preferences: Optional[List[str]] = None,
        location: Optional[str] = None
    ) -> Dict[str, Any]:
        """Top approved vendors per relevant category for an event type"""
        query = db.query(Vendor).filter(Vendor.is_approved == True)
        categories = EVENT_VENDOR_CATEGORIES.get(event_type.lower())
        if categories:
            query = query.filter(Vendor.category.in_(categories))

        vendors = query.order_by(Vendor.name.asc()).all()
        if not vendors:
            raise NotFoundError("Vendor", "No vendors found matching the criteria")

        scored = sorted(
            ((VendorService.score_vendor(vendor, preferences or [], location), vendor) for vendor in vendors),
            key=lambda pair: pair[0],
            reverse=True
        )

        grouped: Dict[str, List] = {}
        for score, vendor in scored:
            bucket = grouped.setdefault(vendor.category or "other", [])
            if len(bucket) < SUGGESTIONS_PER_CATEGORY:
                bucket.append((score, vendor))

        return {
            "grouped": grouped,
            "total_suggestions": sum(len(bucket) for bucket in grouped.values()),
        }
