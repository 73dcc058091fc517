"""
Event analytics, engagement scoring and attendee feedback
"""

import logging
import math
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from eventra.core.errors import NotFoundError
from eventra.models import AttendeeFeedback, Event, EventAnalytics, EventTeamMember, Guest, Task
from eventra.schemas.analytics import AnalyticsCreate, AnalyticsUpdate, AttendeeData, FeedbackCreate
from eventra.utils.security import AuthUser

logger = logging.getLogger(__name__)

ATTENDANCE_WEIGHT = 0.3
TIME_WEIGHT = 0.4
INTERACTION_WEIGHT = 0.3

# One hour of average attendance scores 100 on the time axis
FULL_SESSION_MINUTES = 60
# Five interactions per attendee scores 100 on the interaction axis
POINTS_PER_INTERACTION = 20

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))

def calculate_engagement_score(
    estimated_guests: Optional[int],
    total_attendees: int,
    average_time_spent: float,
    interactions: int
) -> int:
    """Weighted 0-100 engagement score.

    Three ratios, each clamped to [0, 100]:
      - attendance: attendees as a percentage of the expected guest count
      - time: average minutes attended relative to a one hour session
      - interaction: 20 points per interaction per attendee

    Combined with weights 0.3 / 0.4 / 0.3 and rounded half up. An event
    with no attendees scores 0 on the interaction axis.
    """
    expected = estimated_guests if estimated_guests and estimated_guests > 0 else 1

    attendance_score = _clamp(total_attendees / expected * 100)
    time_score = _clamp(average_time_spent / FULL_SESSION_MINUTES * 100)
    if total_attendees > 0:
        interaction_score = _clamp(interactions / total_attendees * POINTS_PER_INTERACTION)
    else:
        interaction_score = 0.0

    return round_half_up(
        attendance_score * ATTENDANCE_WEIGHT
        + time_score * TIME_WEIGHT
        + interaction_score * INTERACTION_WEIGHT
    )

def build_detailed_metrics(
    estimated_guests: Optional[int],
    total_attendees: int,
    average_time_spent: float,
    interactions: int
) -> Dict[str, float]:
    """Unclamped ratios shown next to the score"""
    expected = estimated_guests if estimated_guests and estimated_guests > 0 else 1
    return {
        "attendee_percentage": round_half_up(total_attendees / expected * 100),
        "interaction_rate": interactions / total_attendees if total_attendees > 0 else 0,
        "avg_time_percentage": round_half_up(average_time_spent / FULL_SESSION_MINUTES * 100),
    }

class AnalyticsService:
    """Service for analytics and feedback operations"""

    @staticmethod
    def generate_event_analytics(db: Session, event: Event, attendee_data: AttendeeData) -> EventAnalytics:
        """Score an event from its attendance numbers and store the result"""
        feedback_score = attendee_data.feedback_score
        if feedback_score is None:
            summary = AnalyticsService.get_feedback_summary(db, event.id)
            if summary["total_feedback_count"]:
                feedback_score = summary["average_overall_rating"]

        analytics = EventAnalytics(
            event_id=event.id,
            attendee_count=attendee_data.total_attendees,
            engagement_score=calculate_engagement_score(
                event.estimated_guests,
                attendee_data.total_attendees,
                attendee_data.average_time_spent,
                attendee_data.interactions
            ),
            average_attendance_time=attendee_data.average_time_spent,
            max_concurrent_users=attendee_data.max_concurrent_users,
            total_interactions=attendee_data.interactions,
            feedback_score=feedback_score,
            analytics_date=datetime.utcnow(),
            detailed_metrics=build_detailed_metrics(
                event.estimated_guests,
                attendee_data.total_attendees,
                attendee_data.average_time_spent,
                attendee_data.interactions
            ),
        )
        db.add(analytics)
        db.commit()
        db.refresh(analytics)

        logger.info(f"Analytics generated for event {event.id}: score={analytics.engagement_score}")
        return analytics

    @staticmethod
    def create_analytics(db: Session, event_id: int, analytics_data: AnalyticsCreate) -> EventAnalytics:
        values = analytics_data.model_dump()
        if values.get("analytics_date") is None:
            values["analytics_date"] = datetime.utcnow()

        analytics = EventAnalytics(event_id=event_id, **values)
        db.add(analytics)
        db.commit()
        db.refresh(analytics)
        return analytics

    @staticmethod
    def list_analytics(db: Session, event_id: int) -> List[EventAnalytics]:
        return db.query(EventAnalytics).filter(
            EventAnalytics.event_id == event_id
        ).order_by(EventAnalytics.analytics_date.desc(), EventAnalytics.id.desc()).all()

    @staticmethod
    def get_analytics(db: Session, analytics_id: int) -> EventAnalytics:
        analytics = db.query(EventAnalytics).filter(EventAnalytics.id == analytics_id).first()
        if not analytics:
            raise NotFoundError("Analytics data")
        return analytics

    @staticmethod
    def update_analytics(db: Session, analytics: EventAnalytics, analytics_update: AnalyticsUpdate) -> EventAnalytics:
        for field, value in analytics_update.model_dump(exclude_unset=True).items():
            setattr(analytics, field, value)
        analytics.updated_at = datetime.utcnow()

        db.commit()
        db.refresh(analytics)
        return analytics

    # -------- Feedback --------

    @staticmethod
    def submit_feedback(db: Session, event_id: int, feedback_data: FeedbackCreate) -> AttendeeFeedback:
        feedback = AttendeeFeedback(event_id=event_id, **feedback_data.model_dump())
        db.add(feedback)
        db.commit()
        db.refresh(feedback)
        return feedback

    @staticmethod
    def list_feedback(db: Session, event_id: int) -> List[AttendeeFeedback]:
        return db.query(AttendeeFeedback).filter(
            AttendeeFeedback.event_id == event_id
        ).order_by(AttendeeFeedback.created_at.desc(), AttendeeFeedback.id.desc()).all()

    @staticmethod
    def get_feedback_summary(db: Session, event_id: int) -> Dict:
        """Average ratings; optional ratings average only over rows that have them"""
        feedback = db.query(AttendeeFeedback).filter(AttendeeFeedback.event_id == event_id).all()

        total = len(feedback)
        if total == 0:
            return {
                "average_overall_rating": 0,
                "average_content_rating": 0,
                "average_technical_rating": 0,
                "average_engagement_rating": 0,
                "recommendation_percentage": 0,
                "total_feedback_count": 0,
            }

        def average(values):
            values = [v for v in values if v is not None]
            return round(sum(values) / len(values), 2) if values else 0

        recommend_count = sum(1 for f in feedback if f.would_recommend)

        return {
            "average_overall_rating": average(f.overall_rating for f in feedback),
            "average_content_rating": average(f.content_rating for f in feedback),
            "average_technical_rating": average(f.technical_rating for f in feedback),
            "average_engagement_rating": average(f.engagement_rating for f in feedback),
            "recommendation_percentage": round(recommend_count / total * 100, 2),
            "total_feedback_count": total,
        }

    # -------- Dashboard --------

    @staticmethod
    def get_dashboard_overview(db: Session, user: AuthUser) -> Dict:
        """Aggregate numbers across every event the user can access"""
        team_event_ids = db.query(EventTeamMember.event_id).filter(EventTeamMember.user_id == user.id)
        events = db.query(Event).filter(
            or_(Event.owner_id == user.id, Event.id.in_(team_event_ids))
        ).all()
        event_ids = [e.id for e in events]

        events_by_status: Dict[str, int] = {}
        for event in events:
            events_by_status[event.status] = events_by_status.get(event.status, 0) + 1

        now = datetime.utcnow()
        upcoming = sorted(
            (e for e in events if e.date >= now and e.status != "cancelled"),
            key=lambda e: e.date
        )[:5]

        total_tasks = 0
        completed_tasks = 0
        guests_by_status: Dict[str, int] = {}
        average_engagement = None

        if event_ids:
            total_tasks = db.query(func.count(Task.id)).filter(Task.event_id.in_(event_ids)).scalar()
            completed_tasks = db.query(func.count(Task.id)).filter(
                Task.event_id.in_(event_ids),
                Task.status == "completed"
            ).scalar()

            guest_rows = db.query(Guest.status, func.count(Guest.id)).filter(
                Guest.event_id.in_(event_ids)
            ).group_by(Guest.status).all()
            guests_by_status = {status: count for status, count in guest_rows}

            # Latest analytics row per event
            latest_scores = []
            for event_id in event_ids:
                latest = db.query(EventAnalytics.engagement_score).filter(
                    EventAnalytics.event_id == event_id
                ).order_by(EventAnalytics.analytics_date.desc(), EventAnalytics.id.desc()).first()
                if latest:
                    latest_scores.append(latest[0])
            if latest_scores:
                average_engagement = round(sum(latest_scores) / len(latest_scores), 1)

        return {
            "total_events": len(events),
            "events_by_status": events_by_status,
            "upcoming_events": [
                {"id": e.id, "name": e.name, "date": e.date, "format": e.format, "status": e.status}
                for e in upcoming
            ],
            "total_tasks": total_tasks,
            "completed_tasks": completed_tasks,
            "task_completion_rate": round_half_up(completed_tasks / total_tasks * 100) if total_tasks else 0,
            "guests_by_status": guests_by_status,
            "total_guests": sum(guests_by_status.values()),
            "average_engagement_score": average_engagement,
        }
