"""
Tests for AI suggestions and their static fallbacks
"""

import asyncio
import json
from datetime import datetime
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from eventra.core.config import settings
from eventra.services.ai_service import AISuggestionService, resolve_due_date

class StubCompletions:
    """Stands in for client.chat.completions"""

    def __init__(self, contents=None, error=None):
        self.contents = list(contents or [])
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        content = self.contents.pop(0) if self.contents else None
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])

def stub_client(contents=None, error=None):
    return SimpleNamespace(chat=SimpleNamespace(completions=StubCompletions(contents, error)))

@pytest.fixture(autouse=True)
def ai_enabled(monkeypatch):
    monkeypatch.setattr(settings, "AI_ENABLED", True)

def run(coro):
    return asyncio.run(coro)

def test_falls_back_on_client_failure():
    service = AISuggestionService(client=stub_client(error=RuntimeError("network down")))

    result = run(service.generate_suggestions("conference"))

    assert result["source"] == "fallback"
    assert [e["id"] for e in result["events"]] == ["conf1", "conf2"]
    assert result["tasks"][0]["title"] == "Secure keynote speakers"
    assert "budget" not in result

def test_falls_back_on_openai_error():
    service = AISuggestionService(client=stub_client(error=OpenAIError("quota exceeded")))

    result = run(service.generate_suggestions("webinar"))

    assert result["source"] == "fallback"
    assert result["themes"][0]["name"] == "Knowledge Share"

def test_falls_back_on_invalid_json():
    service = AISuggestionService(client=stub_client(contents=["not json"]))

    result = run(service.generate_suggestions("birthday"))

    assert result["source"] == "fallback"
    assert result["events"][0]["title"] == "Virtual Birthday Celebration"

def test_falls_back_without_api_key(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)

    result = run(AISuggestionService().generate_suggestions("conference"))

    assert result["source"] == "fallback"

def test_falls_back_when_disabled(monkeypatch):
    monkeypatch.setattr(settings, "AI_ENABLED", False)
    completions = StubCompletions(contents=["{}"])
    service = AISuggestionService(client=SimpleNamespace(chat=SimpleNamespace(completions=completions)))

    result = run(service.generate_suggestions("conference"))

    assert result["source"] == "fallback"
    assert completions.calls == []

def test_fallback_lookup_is_case_insensitive():
    service = AISuggestionService(client=stub_client(error=RuntimeError()))

    assert run(service.generate_suggestions("Conference"))["events"][0]["id"] == "conf1"
    assert run(service.generate_suggestions("gala dinner"))["events"][0]["id"] == "other1"

def test_fallback_budget_allocations():
    service = AISuggestionService(client=stub_client(error=RuntimeError()))

    result = run(service.generate_suggestions("conference", budget=10000))

    assert result["budget"] == [
        {"category": "Virtual Platform", "percentage": 0.30, "estimated_amount": 3000, "notes": "Suggested allocation for virtual platform"},
        {"category": "Speakers/Presenters", "percentage": 0.25, "estimated_amount": 2500, "notes": "Suggested allocation for speakers/presenters"},
        {"category": "Marketing", "percentage": 0.20, "estimated_amount": 2000, "notes": "Suggested allocation for marketing"},
        {"category": "Staff", "percentage": 0.15, "estimated_amount": 1500, "notes": "Suggested allocation for staff"},
        {"category": "Contingency", "percentage": 0.10, "estimated_amount": 1000, "notes": "Suggested allocation for contingency"},
    ]

def test_fallback_tables_are_not_mutated():
    service = AISuggestionService(client=stub_client(error=RuntimeError()))

    first = run(service.generate_suggestions("webinar", budget=100))
    first["events"].clear()
    second = run(service.generate_suggestions("webinar"))

    assert len(second["events"]) == 2
    assert "budget" not in second

def test_ai_suggestions_get_ids_and_palette():
    payload = {
        "events": [{"title": "Hackathon"}],
        "themes": [{"name": "Neon"}, {"id": "keep", "name": "Mono", "color_scheme": ["#000000"]}],
        "tasks": [{"title": "Find judges"}],
    }
    service = AISuggestionService(client=stub_client(contents=[json.dumps(payload)]))

    result = run(service.generate_suggestions("hackathon"))

    assert result["source"] == "ai"
    assert result["events"][0]["id"] == "ai_event_0"
    assert result["themes"][0]["id"] == "ai_theme_0"
    assert result["themes"][0]["color_scheme"] == ["#4F46E5", "#10B981", "#F3F4F6"]
    assert result["themes"][1]["id"] == "keep"
    assert result["themes"][1]["color_scheme"] == ["#000000"]

def test_request_uses_json_mode():
    client = stub_client(contents=[json.dumps({"events": [], "themes": [], "tasks": []})])
    service = AISuggestionService(client=client)

    run(service.generate_suggestions("conference", theme="Space"))

    call = client.chat.completions.calls[0]
    assert call["model"] == settings.OPENAI_MODEL
    assert call["response_format"] == {"type": "json_object"}
    assert "Space" in call["messages"][0]["content"]

def test_missing_budget_triggers_second_call():
    suggestions = json.dumps({"events": [], "themes": [], "tasks": []})
    budget = json.dumps({"budget": [{"category": "Venue", "percentage": 0.5, "notes": "half"}]})
    client = stub_client(contents=[suggestions, budget])
    service = AISuggestionService(client=client)

    result = run(service.generate_suggestions("wedding", budget=2000))

    assert len(client.chat.completions.calls) == 2
    assert result["source"] == "ai"
    assert result["budget"] == [{"category": "Venue", "percentage": 0.5, "notes": "half", "estimated_amount": 1000}]

def test_failed_budget_call_falls_back_alone():
    suggestions = json.dumps({"events": [{"id": "x", "title": "Gala"}], "themes": [], "tasks": []})
    service = AISuggestionService(client=stub_client(contents=[suggestions, "{}"]))

    result = run(service.generate_suggestions("birthday", budget=1000))

    assert result["source"] == "ai"
    assert result["events"][0]["title"] == "Gala"
    assert [item["category"] for item in result["budget"]] == [
        "Virtual Platform", "Digital Activities", "Gifts/Deliveries", "Decorations"
    ]

def test_generate_budget_totals():
    service = AISuggestionService(client=stub_client(error=RuntimeError()))

    result = run(service.generate_budget("webinar", 999))

    assert result["source"] == "fallback"
    assert result["total_budget"] == 999
    # 349.65 + 299.7 + 199.8 + 149.85 rounded half up
    assert [item["estimated_amount"] for item in result["items"]] == [350, 300, 200, 150]
    assert result["allocated"] == 1000
    assert result["remaining"] == -1

def test_improvements_fallback_by_format():
    service = AISuggestionService(client=stub_client(error=RuntimeError()))
    event = SimpleNamespace(
        name="Town Hall", type="meeting", format="hybrid", date=datetime(2030, 1, 1),
        estimated_guests=None, budget=None, theme=None, description=None, status="draft"
    )

    result = run(service.improve_event(event, [], 0))

    assert result["source"] == "fallback"
    assert result["improvements"][0]["title"] == "Give remote attendees an equal voice"

def test_improvements_from_ai():
    improvements = [{"area": "Content", "title": f"Idea {i}"} for i in range(7)]
    service = AISuggestionService(client=stub_client(contents=[json.dumps({"improvements": improvements})]))
    event = SimpleNamespace(
        name="Town Hall", type="meeting", format="virtual", date=datetime(2030, 1, 1),
        estimated_guests=50, budget=1000, theme="Open", description="Quarterly", status="planning"
    )
    task = SimpleNamespace(title="Send agenda")

    result = run(service.improve_event(event, [task], 12))

    assert result["source"] == "ai"
    assert len(result["improvements"]) == 5

def test_checklist_fallback_resolves_due_dates():
    service = AISuggestionService(client=stub_client(error=RuntimeError()))

    result = run(service.generate_checklist("conference", datetime(2030, 6, 30, 10, 0)))

    assert result["source"] == "fallback"
    first = result["tasks"][0]
    assert first["due_date"] == "60 days before event"
    assert first["due_at"] == datetime(2030, 5, 1, 10, 0)
    assert first["priority"] == "high"

def test_checklist_normalizes_priorities():
    tasks = [{"title": "Book band", "priority": "URGENT", "due_date": "1 day before event"}, {"description": "untitled"}]
    service = AISuggestionService(client=stub_client(contents=[json.dumps({"tasks": tasks})]))

    result = run(service.generate_checklist("party", datetime(2030, 1, 10)))

    assert result["source"] == "ai"
    assert len(result["tasks"]) == 1
    assert result["tasks"][0]["priority"] == "medium"
    assert result["tasks"][0]["due_at"] == datetime(2030, 1, 9)

def test_checklist_coerces_loose_model_output():
    tasks = [
        {"title": "Book venue", "due_date": 30},
        {"title": 2030, "due_date": ["soon"], "priority": None},
        "not a task",
        {"title": {"nested": True}},
        {"title": "   "},
    ]
    service = AISuggestionService(client=stub_client(contents=[json.dumps({"tasks": tasks})]))

    result = run(service.generate_checklist("party", datetime(2030, 1, 31)))

    assert result["source"] == "ai"
    assert [t["title"] for t in result["tasks"]] == ["Book venue", "2030"]
    assert result["tasks"][0]["due_date"] == "30 days before event"
    assert result["tasks"][0]["due_at"] == datetime(2030, 1, 1)
    assert result["tasks"][1]["due_at"] is None
    assert result["tasks"][1]["priority"] == "medium"

def test_checklist_without_usable_tasks_falls_back():
    tasks = [{"description": "no title"}, 42]
    service = AISuggestionService(client=stub_client(contents=[json.dumps({"tasks": tasks})]))

    result = run(service.generate_checklist("webinar"))

    assert result["source"] == "fallback"
    assert result["tasks"]
    assert all(t["title"] for t in result["tasks"])


def test_resolve_due_date():
    event_date = datetime(2030, 3, 15)

    assert resolve_due_date("14 days before event", event_date) == datetime(2030, 3, 1)
    assert resolve_due_date("on the day", event_date) is None
    assert resolve_due_date("7 days before event", None) is None
    assert resolve_due_date(None, event_date) is None
