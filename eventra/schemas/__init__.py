"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .task import *
from .guest import *
from .vendor import *
from .analytics import *
from .ai import *
from .preference import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "PartialUpdate",
    "EventCreate",
    "EventUpdate",
    "EventResponse",
    "EventDetail",
    "EventCloneRequest",
    "TeamMemberCreate",
    "TeamMemberResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "GuestCreate",
    "GuestUpdate",
    "GuestResponse",
    "GuestStats",
    "VendorCreate",
    "VendorUpdate",
    "VendorResponse",
    "EventVendorCreate",
    "EventVendorUpdate",
    "EventVendorResponse",
    "AttendeeData",
    "AnalyticsCreate",
    "AnalyticsUpdate",
    "AnalyticsResponse",
    "FeedbackCreate",
    "FeedbackResponse",
    "FeedbackSummary",
    "SuggestionPreferences",
    "SuggestionRequest",
    "BudgetRequest",
    "ImproveEventRequest",
    "ChecklistRequest",
    "PreferenceUpdate",
    "PreferenceResponse",
    "PlanningTipResponse",
    "ShareCreate",
    "ViewCreate",
    "PublicEventResponse",
    "VendorSuggestionRequest",
    "TimelineActivity",
    "TimelineRequest",
]
