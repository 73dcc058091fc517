"""
Event analytics and attendee feedback models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, Float, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from eventra.core.db import Base

class EventAnalytics(Base):
    __tablename__ = "event_analytics"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    attendee_count = Column(Integer, nullable=False, default=0)
    engagement_score = Column(Integer, nullable=False, default=0)  # 0-100
    average_attendance_time = Column(Float, nullable=False, default=0)  # minutes
    max_concurrent_users = Column(Integer, nullable=False, default=0)
    total_interactions = Column(Integer, nullable=False, default=0)
    feedback_score = Column(Float, nullable=True)
    analytics_date = Column(DateTime, default=datetime.utcnow)
    detailed_metrics = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    event = relationship("Event", back_populates="analytics")

class AttendeeFeedback(Base):
    __tablename__ = "attendee_feedback"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    attendee_name = Column(String(255), nullable=True)
    attendee_email = Column(String(255), nullable=True)
    overall_rating = Column(Integer, nullable=False)  # 1-5
    content_rating = Column(Integer, nullable=True)
    technical_rating = Column(Integer, nullable=True)
    engagement_rating = Column(Integer, nullable=True)
    would_recommend = Column(Boolean, default=False)
    comments = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    event = relationship("Event", back_populates="feedback")
