"""
AI-assisted planning suggestions

Every public method tries the OpenAI model first and falls back to the
static tables in ai_fallbacks when the call fails for any reason
(disabled, missing key, timeout, API error, malformed JSON).
"""

import copy
import json
import logging
import re
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from openai import AsyncOpenAI, OpenAIError
from sqlalchemy import func
from sqlalchemy.orm import Session

from eventra.core.config import settings
from eventra.core.errors import AIServiceError
from eventra.models import AiSuggestionRecord, Event, Task, UserPreference
from eventra.schemas.task import TaskCreate
from eventra.services.ai_fallbacks import (
    DEFAULT_COLOR_SCHEME,
    FALLBACK_BUDGET_ALLOCATIONS,
    FALLBACK_IMPROVEMENTS,
    FALLBACK_SUGGESTIONS,
)
from eventra.services.analytics_service import round_half_up
from eventra.services.task_service import TaskService
from eventra.utils.security import AuthUser

logger = logging.getLogger(__name__)

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"
# Deterministic ranking and templates, no model call
SOURCE_RULES = "rules"

PRIORITIES = ("low", "medium", "high")
DAYS_BEFORE_PATTERN = re.compile(r"(\d+)\s+days?\s+before", re.IGNORECASE)

def resolve_due_date(due_text: Optional[str], event_date: Optional[datetime]) -> Optional[datetime]:
    """Turn "N days before event" into a datetime relative to the event"""
    if not due_text or event_date is None:
        return None
    match = DAYS_BEFORE_PATTERN.search(due_text)
    if not match:
        return None
    return event_date - timedelta(days=int(match.group(1)))

def fallback_suggestions(event_type: str, budget: Optional[float] = None) -> Dict[str, Any]:
    key = event_type.lower()
    if key not in FALLBACK_SUGGESTIONS:
        key = "other"

    suggestions = copy.deepcopy(FALLBACK_SUGGESTIONS[key])
    if budget and budget > 0:
        suggestions["budget"] = fallback_budget(event_type, budget)
    return suggestions

def fallback_budget(event_type: str, total_budget: float) -> List[Dict[str, Any]]:
    allocations = FALLBACK_BUDGET_ALLOCATIONS.get(event_type.lower(), FALLBACK_BUDGET_ALLOCATIONS["default"])
    return [
        {
            "category": category,
            "percentage": percentage,
            "estimated_amount": round_half_up(total_budget * percentage),
            "notes": f"Suggested allocation for {category.lower()}",
        }
        for category, percentage in allocations.items()
    ]

def fallback_improvements(event_format: Optional[str]) -> List[Dict[str, Any]]:
    key = (event_format or "").lower()
    if key not in FALLBACK_IMPROVEMENTS:
        key = "virtual"
    return copy.deepcopy(FALLBACK_IMPROVEMENTS[key])

def summarize_budget(total_budget: float, items: List[Dict[str, Any]]) -> Dict[str, Any]:
    allocated = sum(item.get("estimated_amount") or 0 for item in items)
    return {
        "total_budget": total_budget,
        "allocated": allocated,
        "remaining": total_budget - allocated,
        "items": items,
    }

class AISuggestionService:
    """Generates planning suggestions with an OpenAI model"""

    def __init__(self, client: Optional[AsyncOpenAI] = None):
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy client; raises when AI suggestions are switched off"""
        if not settings.AI_ENABLED:
            raise AIServiceError("AI suggestions are disabled")
        if self._client is None:
            if not settings.OPENAI_API_KEY:
                raise AIServiceError("OpenAI API key is not configured")
            self._client = AsyncOpenAI(
                api_key=settings.OPENAI_API_KEY,
                timeout=settings.OPENAI_TIMEOUT_S,
                max_retries=settings.OPENAI_MAX_RETRIES,
            )
        return self._client

    async def _complete_json(self, system_prompt: str) -> Any:
        response = await self.client.chat.completions.create(
            model=settings.OPENAI_MODEL,
            messages=[{"role": "system", "content": system_prompt}],
            response_format={"type": "json_object"},
        )
        content = response.choices[0].message.content
        if not content:
            raise AIServiceError("No content received from the AI model")
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise AIServiceError(f"AI model returned invalid JSON: {e}")

    @staticmethod
    def _log_fallback(operation: str, error: Exception) -> None:
        if isinstance(error, AIServiceError):
            logger.info(f"{operation}: using fallback ({error.message})")
        elif isinstance(error, OpenAIError):
            logger.warning(f"{operation}: OpenAI API error: {error}")
        else:
            logger.error(f"{operation}: unexpected AI error: {error}")

    # -------- Suggestions --------

    async def generate_suggestions(
        self,
        event_type: str,
        theme: Optional[str] = None,
        budget: Optional[float] = None,
        preferences: Optional[Dict[str, Any]] = None,
        personal_context: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Event ideas, themes, tasks and (with a budget) allocations"""
        preferences = preferences or {}
        try:
            prompt = self._suggestion_prompt(event_type, theme, budget, preferences, personal_context or {})
            suggestions = self._normalize_suggestions(await self._complete_json(prompt))

            if budget and budget > 0 and not suggestions.get("budget"):
                suggestions["budget"], _ = await self._budget_items(
                    event_type, budget, preferences.get("guest_count")
                )

            suggestions["source"] = SOURCE_AI
            return suggestions
        except Exception as e:
            self._log_fallback("Event suggestions", e)

        suggestions = fallback_suggestions(event_type, budget)
        suggestions["source"] = SOURCE_FALLBACK
        return suggestions

    @staticmethod
    def _suggestion_prompt(
        event_type: str,
        theme: Optional[str],
        budget: Optional[float],
        preferences: Dict[str, Any],
        personal_context: Dict[str, Any]
    ) -> str:
        lines = [
            "You are an expert event planning assistant with deep knowledge of virtual and hybrid events.",
            f"Generate creative, practical suggestions for a {event_type} event.",
        ]
        if theme:
            lines.append(f'The event has a "{theme}" theme.')
        if budget:
            lines.append(f"The event has a budget of ${budget:g}.")
        if preferences.get("guest_count"):
            lines.append(f"The event will have approximately {preferences['guest_count']} guests.")
        if preferences.get("format"):
            lines.append(f"The event format will be {preferences['format']}.")
        if preferences.get("duration"):
            lines.append(f"The event duration will be {preferences['duration']}.")
        if personal_context.get("previous_events"):
            lines.append(f"Previous events organized: {', '.join(personal_context['previous_events'])}.")
        user_prefs = personal_context.get("preferences") or {}
        if user_prefs:
            lines.append("User preferences: " + ", ".join(f"{k}: {v}" for k, v in user_prefs.items()) + ".")

        lines.append(
            "Respond with a JSON object with keys \"events\" (id, title, description, complexity 1-5, "
            "estimated_cost in dollars, suggested_duration), \"themes\" (id, name, description, "
            "color_scheme as three hex colors, suitable event types) and \"tasks\" (title, description, "
            "due_date as \"N days before event\", priority low|medium|high)."
        )
        if budget:
            lines.append(
                "Also include \"budget\": a list of {category, percentage between 0 and 1, "
                "estimated_amount in dollars, notes}."
            )
        lines.append("Generate 2-3 events, 2-3 themes, and 3-5 important tasks.")
        return "\n".join(lines)

    @staticmethod
    def _normalize_suggestions(payload: Any) -> Dict[str, Any]:
        if not isinstance(payload, dict):
            raise AIServiceError("Unexpected AI response shape")

        events = payload.get("events") or []
        themes = payload.get("themes") or []
        tasks = payload.get("tasks") or []
        if not isinstance(events, list) or not isinstance(themes, list) or not isinstance(tasks, list):
            raise AIServiceError("Unexpected AI response shape")

        suggestions = {
            "events": [
                {**event, "id": event.get("id") or f"ai_event_{i}"}
                for i, event in enumerate(events)
            ],
            "themes": [
                {
                    **theme,
                    "id": theme.get("id") or f"ai_theme_{i}",
                    "color_scheme": theme.get("color_scheme") or list(DEFAULT_COLOR_SCHEME),
                }
                for i, theme in enumerate(themes)
            ],
            "tasks": tasks,
        }
        if payload.get("budget"):
            suggestions["budget"] = payload["budget"]
        return suggestions

    # -------- Budget --------

    async def _budget_items(
        self,
        event_type: str,
        total_budget: float,
        guest_count: Optional[int] = None
    ) -> Tuple[List[Dict[str, Any]], str]:
        try:
            prompt = (
                f"You are an expert event budget planner specializing in virtual and hybrid {event_type} events.\n"
                f"Suggest a practical allocation of a total budget of ${total_budget:g}.\n"
                + (f"The event will have approximately {guest_count} guests.\n" if guest_count else "")
                + "Respond with a JSON object {\"budget\": [{category, percentage between 0 and 1 "
                "(summing to 1.0), estimated_amount in dollars, notes}]}. "
                "Generate 4-7 categories that make sense for this type of event."
            )
            payload = await self._complete_json(prompt)
            items = payload.get("budget") if isinstance(payload, dict) else None
            if not items or not isinstance(items, list):
                raise AIServiceError("AI response did not include a budget")

            for item in items:
                if item.get("estimated_amount") is None and item.get("percentage") is not None:
                    item["estimated_amount"] = round_half_up(total_budget * float(item["percentage"]))
            return items, SOURCE_AI
        except Exception as e:
            self._log_fallback("Budget suggestions", e)

        return fallback_budget(event_type, total_budget), SOURCE_FALLBACK

    async def generate_budget(
        self,
        event_type: str,
        total_budget: float,
        guest_count: Optional[int] = None
    ) -> Dict[str, Any]:
        items, source = await self._budget_items(event_type, total_budget, guest_count)
        result = summarize_budget(total_budget, items)
        result["source"] = source
        return result

    # -------- Improvements --------

    async def improve_event(self, event: Event, tasks: List[Task], guest_count: int) -> Dict[str, Any]:
        """3-5 concrete improvements for an existing event"""
        try:
            prompt = "\n".join([
                "You are an expert virtual event planning assistant. Analyze the event below and "
                "suggest specific improvements covering engagement, technical setup and content.",
                "",
                "Event details:",
                f"- Name: {event.name}",
                f"- Type: {event.type}",
                f"- Format: {event.format}",
                f"- Date: {event.date.date().isoformat()}",
                f"- Estimated Guests: {event.estimated_guests or 'Not specified'}",
                f"- Budget: {f'${event.budget}' if event.budget else 'Not specified'}",
                f"- Theme: {event.theme or 'Not specified'}",
                f"- Description: {event.description or 'Not provided'}",
                f"- Status: {event.status}",
                "",
                f"Current tasks ({len(tasks)}): {', '.join(t.title for t in tasks)}",
                f"Guest count: {guest_count} guests",
                "",
                "Respond with a JSON object {\"improvements\": [...]} holding 3-5 items, each with "
                "area, title, description, impact (high|medium|low), implementation and resources (list).",
            ])
            payload = await self._complete_json(prompt)
            improvements = payload.get("improvements") if isinstance(payload, dict) else payload
            if not isinstance(improvements, list) or not improvements:
                raise AIServiceError("AI response did not include improvements")

            return {"improvements": improvements[:5], "source": SOURCE_AI}
        except Exception as e:
            self._log_fallback("Event improvements", e)

        return {"improvements": fallback_improvements(event.format), "source": SOURCE_FALLBACK}

    # -------- Checklist --------

    @staticmethod
    def _checklist_item(item: Any, event_date: Optional[datetime]) -> Optional[Dict[str, Any]]:
        """Normalise one model-supplied task; None when it has no usable title"""
        if not isinstance(item, dict):
            return None
        title = item.get("title")
        if isinstance(title, bool) or not isinstance(title, (str, int, float)):
            return None
        title = str(title).strip()[:255]
        if not title:
            return None

        due_text = item.get("due_date")
        if isinstance(due_text, (int, float)) and not isinstance(due_text, bool):
            due_text = f"{int(due_text)} days before event"
        elif not isinstance(due_text, str):
            due_text = None

        description = item.get("description")
        priority = str(item.get("priority") or "medium").lower()
        return {
            "title": title,
            "description": str(description) if description is not None else None,
            "due_date": due_text,
            "due_at": resolve_due_date(due_text, event_date),
            "priority": priority if priority in PRIORITIES else "medium",
        }

    async def generate_checklist(
        self,
        event_type: str,
        event_date: Optional[datetime] = None,
        extra_requirements: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """Planning tasks with relative due dates resolved against the event date"""
        try:
            prompt = (
                f"You are an expert event planner. Create a planning checklist for a {event_type} event.\n"
                + (f"Additional requirements: {'; '.join(extra_requirements)}.\n" if extra_requirements else "")
                + "Respond with a JSON object {\"tasks\": [{title, description, due_date as "
                "\"N days before event\", priority low|medium|high}]} with 5-8 tasks."
            )
            payload = await self._complete_json(prompt)
            tasks = payload.get("tasks") if isinstance(payload, dict) else None
            if not isinstance(tasks, list):
                raise AIServiceError("AI response did not include tasks")

            checklist = [
                entry for entry in (self._checklist_item(item, event_date) for item in tasks) if entry
            ]
            if not checklist:
                raise AIServiceError("AI response did not include usable tasks")
            return {"tasks": checklist, "source": SOURCE_AI}
        except Exception as e:
            self._log_fallback("Checklist", e)

        checklist = [
            self._checklist_item(item, event_date) for item in fallback_suggestions(event_type)["tasks"]
        ]
        return {"tasks": checklist, "source": SOURCE_FALLBACK}

    @staticmethod
    def create_checklist_tasks(db: Session, event: Event, checklist: List[Dict[str, Any]]) -> List[Task]:
        """Persist normalised checklist items as pending tasks on the event"""
        created = []
        for item in checklist:
            created.append(TaskService.create_task(db, event.id, TaskCreate(
                title=item["title"],
                description=item.get("description"),
                priority=item["priority"],
                category="checklist",
                due_date=item.get("due_at"),
            )))
        logger.info(f"Created {len(created)} checklist tasks for event {event.id}")
        return created

    # -------- Personalisation and usage --------

    @staticmethod
    def build_personal_context(db: Session, user: AuthUser) -> Dict[str, Any]:
        """Recent event names and stored preferences of the caller"""
        recent = db.query(Event.name).filter(Event.owner_id == user.id).order_by(
            Event.created_at.desc()
        ).limit(5).all()

        context: Dict[str, Any] = {"previous_events": [name for (name,) in recent], "preferences": {}}

        preference = db.query(UserPreference).filter(UserPreference.user_id == user.id).first()
        if preference:
            if preference.preferred_themes:
                context["preferences"]["preferred themes"] = ", ".join(preference.preferred_themes)
            if preference.preferred_event_types:
                context["preferences"]["preferred event types"] = ", ".join(preference.preferred_event_types)
        return context

    @staticmethod
    def record_request(
        db: Session,
        user: AuthUser,
        suggestion_type: str,
        source: str,
        input_data: Optional[Dict[str, Any]] = None,
        event_id: Optional[int] = None
    ) -> AiSuggestionRecord:
        record = AiSuggestionRecord(
            user_id=user.id,
            event_id=event_id,
            suggestion_type=suggestion_type,
            source=source,
            input_data=input_data,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    @staticmethod
    def get_usage(db: Session, user: AuthUser) -> Dict[str, Any]:
        rows = db.query(
            AiSuggestionRecord.suggestion_type,
            AiSuggestionRecord.source,
            func.count(AiSuggestionRecord.id)
        ).filter(
            AiSuggestionRecord.user_id == user.id
        ).group_by(AiSuggestionRecord.suggestion_type, AiSuggestionRecord.source).all()

        by_type: Dict[str, int] = {}
        by_source: Dict[str, int] = {SOURCE_AI: 0, SOURCE_FALLBACK: 0}
        for suggestion_type, source, count in rows:
            by_type[suggestion_type] = by_type.get(suggestion_type, 0) + count
            by_source[source] = by_source.get(source, 0) + count

        return {"total_requests": sum(by_type.values()), "by_type": by_type, "by_source": by_source}

ai_service = AISuggestionService()
