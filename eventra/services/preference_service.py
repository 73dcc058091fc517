"""
User preferences and planning tips
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from eventra.models import PlanningTip, UserPreference
from eventra.schemas.preference import PreferenceUpdate
from eventra.utils.security import AuthUser

logger = logging.getLogger(__name__)

DEFAULT_PLANNING_TIPS = [
    {
        "title": "Setting Clear Objectives",
        "description": "Define your event's purpose and goals before starting the planning process.",
        "icon": "tips_and_updates",
        "category": "planning",
    },
    {
        "title": "Effective Scheduling",
        "description": "Create a realistic timeline with buffer time for unexpected delays.",
        "icon": "schedule",
        "category": "organization",
    },
    {
        "title": "Post-Event Evaluation",
        "description": "Gather feedback to improve future events and measure success.",
        "icon": "wysiwyg",
        "category": "analysis",
    },
    {
        "title": "Virtual Engagement",
        "description": "Use interactive tools to keep remote attendees engaged throughout your event.",
        "icon": "tips_and_updates",
        "category": "virtual",
    },
]

class PreferenceService:
    """Service for user preference operations"""

    @staticmethod
    def get_preferences(db: Session, user: AuthUser) -> Dict:
        """Stored preferences, or the defaults when none were saved yet"""
        preference = db.query(UserPreference).filter(UserPreference.user_id == user.id).first()
        if not preference:
            return {
                "user_id": user.id,
                "preferred_themes": [],
                "preferred_event_types": [],
                "notifications_enabled": True,
                "onboarding_completed": False,
                "updated_at": None,
            }
        return {
            "user_id": preference.user_id,
            "preferred_themes": preference.preferred_themes or [],
            "preferred_event_types": preference.preferred_event_types or [],
            "notifications_enabled": preference.notifications_enabled,
            "onboarding_completed": preference.onboarding_completed,
            "updated_at": preference.updated_at,
        }

    @staticmethod
    def upsert_preferences(db: Session, user: AuthUser, preference_update: PreferenceUpdate) -> Dict:
        changes = preference_update.model_dump(exclude_unset=True, exclude_none=True)

        preference = db.query(UserPreference).filter(UserPreference.user_id == user.id).first()
        if not preference:
            preference = UserPreference(user_id=user.id)
            db.add(preference)
            logger.info(f"Creating preferences for user {user.id}")

        for field, value in changes.items():
            setattr(preference, field, value)

        db.commit()
        db.refresh(preference)
        return PreferenceService.get_preferences(db, user)

    @staticmethod
    def list_planning_tips(db: Session, category: Optional[str] = None) -> List[PlanningTip]:
        query = db.query(PlanningTip)
        if category:
            query = query.filter(PlanningTip.category == category.lower())
        return query.order_by(PlanningTip.id.asc()).all()

    @staticmethod
    def seed_planning_tips(db: Session) -> int:
        """Insert the default tips into an empty table"""
        if db.query(PlanningTip).first():
            return 0

        for tip in DEFAULT_PLANNING_TIPS:
            db.add(PlanningTip(**tip))
        db.commit()

        logger.info(f"Seeded {len(DEFAULT_PLANNING_TIPS)} planning tips")
        return len(DEFAULT_PLANNING_TIPS)
