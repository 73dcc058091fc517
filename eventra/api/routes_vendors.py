"""
Vendor directory and event vendor routes
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from eventra.core.db import get_db
from eventra.schemas.vendor import (
    EventVendorCreate,
    EventVendorResponse,
    EventVendorUpdate,
    VendorCreate,
    VendorResponse,
    VendorUpdate,
)
from eventra.services.access_service import AccessService
from eventra.services.vendor_service import VendorService
from eventra.utils.responses import serialize, serialize_many, success_response
from eventra.utils.security import AuthUser, get_current_user, get_optional_user

router = APIRouter()

@router.get("/vendors")
async def list_vendors(
    category: Optional[str] = Query(None),
    is_partner: Optional[bool] = Query(None),
    mine: bool = Query(False),
    db: Session = Depends(get_db),
    user: Optional[AuthUser] = Depends(get_optional_user)
):
    """Vendor directory, partners first"""
    vendors = VendorService.list_vendors(db, user, category=category, is_partner=is_partner, mine=mine)
    return success_response(message="Vendors retrieved", data=serialize_many(VendorResponse, vendors))

@router.get("/vendors/partners")
async def list_partner_vendors(
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    user: Optional[AuthUser] = Depends(get_optional_user)
):
    vendors = VendorService.list_vendors(db, user, category=category, is_partner=True)
    return success_response(message="Partner vendors retrieved", data=serialize_many(VendorResponse, vendors))

@router.post("/vendors")
async def create_vendor(
    vendor_data: VendorCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    vendor = VendorService.create_vendor(db, user, vendor_data)
    message = "Vendor created successfully" if vendor.is_approved else "Vendor submitted for approval"
    return success_response(message=message, data=serialize(VendorResponse, vendor), status_code=201)

@router.get("/vendors/{vendor_id}")
async def get_vendor(
    vendor_id: int,
    db: Session = Depends(get_db),
    user: Optional[AuthUser] = Depends(get_optional_user)
):
    vendor = VendorService.get_vendor(db, vendor_id, user)
    return success_response(message="Vendor retrieved", data=serialize(VendorResponse, vendor))

@router.put("/vendors/{vendor_id}")
async def update_vendor(
    vendor_id: int,
    vendor_update: VendorUpdate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    vendor = VendorService.get_vendor(db, vendor_id, user)
    vendor = VendorService.update_vendor(db, vendor, user, vendor_update)
    return success_response(message="Vendor updated successfully", data=serialize(VendorResponse, vendor))

@router.delete("/vendors/{vendor_id}", status_code=204)
async def delete_vendor(
    vendor_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    vendor = VendorService.get_vendor(db, vendor_id, user)
    VendorService.delete_vendor(db, vendor, user)
    return Response(status_code=204)

# -------- Event vendors --------

@router.get("/events/{event_id}/vendors")
async def list_event_vendors(
    event_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.get_accessible_event(db, event_id, user)
    links = VendorService.list_event_vendors(db, event.id)
    return success_response(message="Event vendors retrieved", data=serialize_many(EventVendorResponse, links))

@router.post("/events/{event_id}/vendors")
async def add_event_vendor(
    event_id: int,
    link_data: EventVendorCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.get_accessible_event(db, event_id, user)
    link = VendorService.add_vendor_to_event(db, event.id, user, link_data)
    return success_response(
        message="Vendor added to event",
        data=serialize(EventVendorResponse, link),
        status_code=201
    )

@router.put("/events/{event_id}/vendors/{vendor_id}")
async def update_event_vendor(
    event_id: int,
    vendor_id: int,
    link_update: EventVendorUpdate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.get_accessible_event(db, event_id, user)
    link = VendorService.get_event_vendor(db, event.id, vendor_id)
    link = VendorService.update_event_vendor(db, link, link_update)
    return success_response(message="Event vendor updated", data=serialize(EventVendorResponse, link))

@router.delete("/events/{event_id}/vendors/{vendor_id}", status_code=204)
async def remove_event_vendor(
    event_id: int,
    vendor_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user)
):
    event = AccessService.get_accessible_event(db, event_id, user)
    link = VendorService.get_event_vendor(db, event.id, vendor_id)
    VendorService.remove_vendor_from_event(db, link)
    return Response(status_code=204)
