"""
AI suggestion request log
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, JSON

from eventra.core.db import Base

class AiSuggestionRecord(Base):
    __tablename__ = "ai_suggestions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    event_id = Column(Integer, nullable=True)
    suggestion_type = Column(String(30), nullable=False)  # suggestions, budget, checklist, improvements
    source = Column(String(10), nullable=False)  # ai, fallback
    input_data = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
