"""
Database models package
"""

from .event import Event, EventTeamMember
from .task import Task
from .guest import Guest
from .vendor import Vendor, EventVendor
from .analytics import EventAnalytics, AttendeeFeedback
from .preference import UserPreference, PlanningTip
from .share import EventShare, EventView
from .ai_suggestion import AiSuggestionRecord

__all__ = [
    "Event",
    "EventTeamMember",
    "Task",
    "Guest",
    "Vendor",
    "EventVendor",
    "EventAnalytics",
    "AttendeeFeedback",
    "UserPreference",
    "PlanningTip",
    "EventShare",
    "EventView",
    "AiSuggestionRecord",
]
