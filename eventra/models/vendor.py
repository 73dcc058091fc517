"""
Vendor directory and event-vendor link models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from eventra.core.db import Base

class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(64), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(50), nullable=False)  # catering, venue, technology, entertainment
    description = Column(Text, nullable=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(50), nullable=True)
    website = Column(String(255), nullable=True)
    is_partner = Column(Boolean, default=False)
    is_approved = Column(Boolean, default=False)
    rating = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    event_links = relationship("EventVendor", back_populates="vendor", cascade="all, delete-orphan")

class EventVendor(Base):
    __tablename__ = "event_vendors"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, confirmed, cancelled
    budget = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    event = relationship("Event", back_populates="vendor_links")
    vendor = relationship("Vendor", back_populates="event_links")

    __table_args__ = (UniqueConstraint("event_id", "vendor_id", name="uq_event_vendor"),)
