"""
Vendor-related Pydantic schemas
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field

from .common import PartialUpdate

EventVendorStatus = Literal["pending", "confirmed", "cancelled"]

class VendorCreate(BaseModel):
    """Schema for registering a vendor"""
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)

class VendorUpdate(PartialUpdate):
    """Schema for updating a vendor; approval flags are admin-only"""
    non_nullable = ("name", "category", "is_partner", "is_approved")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    is_partner: Optional[bool] = None
    is_approved: Optional[bool] = None

class VendorResponse(BaseModel):
    id: int
    owner_id: Optional[str] = None
    name: str
    category: str
    description: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None
    is_partner: bool
    is_approved: bool
    rating: Optional[float] = None
    created_at: datetime

    class Config:
        from_attributes = True

class EventVendorCreate(BaseModel):
    """Attach a directory vendor to an event"""
    vendor_id: int
    status: EventVendorStatus = "pending"
    budget: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None

class EventVendorUpdate(PartialUpdate):
    non_nullable = ("status",)

    status: Optional[EventVendorStatus] = None
    budget: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None

class EventVendorResponse(BaseModel):
    id: int
    event_id: int
    status: str
    budget: Optional[int] = None
    notes: Optional[str] = None
    created_at: datetime
    vendor: VendorResponse

    class Config:
        from_attributes = True
