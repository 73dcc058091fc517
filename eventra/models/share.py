"""
Event share and public view tracking models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from eventra.core.db import Base

class EventShare(Base):
    __tablename__ = "event_shares"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False)
    platform = Column(String(50), nullable=False, default="direct")
    share_type = Column(String(20), nullable=False, default="link")
    created_at = Column(DateTime, default=datetime.utcnow)

    event = relationship("Event", back_populates="shares")

class EventView(Base):
    """One visit to an event's public share page"""
    __tablename__ = "event_views"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    referrer = Column(String(100), nullable=False, default="direct")
    ip_hash = Column(String(16), nullable=True)
    user_agent = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    event = relationship("Event", back_populates="views")
