"""
User preference and planning tip models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON

from eventra.core.db import Base

class UserPreference(Base):
    __tablename__ = "user_preferences"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, unique=True, index=True)
    preferred_themes = Column(JSON, default=list)
    preferred_event_types = Column(JSON, default=list)
    notifications_enabled = Column(Boolean, default=True)
    onboarding_completed = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

class PlanningTip(Base):
    __tablename__ = "planning_tips"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)  # planning, organization, analysis, virtual
    icon = Column(String(50), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
