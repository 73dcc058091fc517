"""
Event model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from eventra.core.db import Base

class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(64), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False)  # conference, birthday, webinar, wedding, other
    format = Column(String(20), nullable=False, default="in-person")  # virtual, in-person, hybrid
    date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=True)
    location = Column(String(255), nullable=True)
    estimated_guests = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="draft")  # draft, planning, active, completed, cancelled
    theme = Column(String(100), nullable=True)
    budget = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    team = relationship("EventTeamMember", back_populates="event", cascade="all, delete-orphan")
    tasks = relationship("Task", back_populates="event", cascade="all, delete-orphan")
    guests = relationship("Guest", back_populates="event", cascade="all, delete-orphan")
    vendor_links = relationship("EventVendor", back_populates="event", cascade="all, delete-orphan")
    analytics = relationship("EventAnalytics", back_populates="event", cascade="all, delete-orphan")
    feedback = relationship("AttendeeFeedback", back_populates="event", cascade="all, delete-orphan")
    shares = relationship("EventShare", back_populates="event", cascade="all, delete-orphan")
    views = relationship("EventView", back_populates="event", cascade="all, delete-orphan")

class EventTeamMember(Base):
    """A user granted edit access to someone else's event"""
    __tablename__ = "event_team"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False)
    user_id = Column(String(64), nullable=False, index=True)
    role = Column(String(20), nullable=False, default="editor")
    created_at = Column(DateTime, default=datetime.utcnow)

    event = relationship("Event", back_populates="team")

    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_event_team_member"),)
