"""
Tests for the AI endpoints
"""

import json
from types import SimpleNamespace

import pytest

from eventra.core.config import settings
from eventra.services.ai_service import ai_service

@pytest.fixture(autouse=True)
def no_openai(monkeypatch):
    """Force the static fallback path"""
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)
    monkeypatch.setattr(ai_service, "_client", None)

def test_suggestions_fallback(client, auth_headers):
    response = client.post(
        "/api/ai/suggestions",
        json={"event_type": "webinar", "budget": 1000, "preferences": {"guest_count": 40}},
        headers=auth_headers()
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["source"] == "fallback"
    assert data["events"][0]["id"] == "web1"
    assert sum(item["estimated_amount"] for item in data["budget"]) == 1000

def test_suggestions_require_auth(client):
    assert client.post("/api/ai/suggestions", json={"event_type": "webinar"}).status_code == 401

def test_budget_endpoint(client, auth_headers, create_event):
    event = create_event()

    response = client.post(
        "/api/ai/budget",
        json={"event_type": "conference", "total_budget": 5000, "event_id": event["id"]},
        headers=auth_headers()
    )

    data = response.json()["data"]
    assert data["allocated"] == 5000
    assert data["remaining"] == 0
    assert len(data["items"]) == 5

def test_budget_requires_positive_total(client, auth_headers):
    response = client.post("/api/ai/budget", json={"event_type": "conference", "total_budget": 0}, headers=auth_headers())

    assert response.status_code == 422

def test_budget_for_foreign_event(client, auth_headers, create_event):
    event = create_event()

    response = client.post(
        "/api/ai/budget",
        json={"event_type": "conference", "total_budget": 5000, "event_id": event["id"]},
        headers=auth_headers("intruder")
    )

    assert response.status_code == 404

def test_improve_event(client, auth_headers, create_event):
    event = create_event(format="in-person")

    response = client.post("/api/ai/improve-event", json={"event_id": event["id"]}, headers=auth_headers())

    data = response.json()["data"]
    assert data["source"] == "fallback"
    assert data["improvements"][0]["area"] == "Logistics"

def test_checklist_creates_tasks(client, auth_headers, create_event):
    event = create_event()

    response = client.post(
        "/api/ai/checklist",
        json={"event_id": event["id"], "create_tasks": True},
        headers=auth_headers()
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["created_tasks"]) == 3

    tasks = client.get(f"/api/events/{event['id']}/tasks", headers=auth_headers()).json()["data"]
    assert [t["title"] for t in tasks] == ["Secure keynote speakers", "Create conference schedule", "Setup virtual platform"]
    assert tasks[0]["due_date"].startswith("2030-05-01")
    assert {t["status"] for t in tasks} == {"pending"}

def model_returning(payload):
    """Client whose chat completions always answer with the given JSON"""
    async def create(**kwargs):
        content = json.dumps(payload)
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

def test_checklist_tasks_from_loose_model_output(client, auth_headers, create_event, monkeypatch):
    monkeypatch.setattr(settings, "AI_ENABLED", True)
    monkeypatch.setattr(ai_service, "_client", model_returning(
        {"tasks": [{"title": "Book venue", "due_date": 30}, {"title": 101, "priority": "high"}]}
    ))
    event = create_event()

    response = client.post(
        "/api/ai/checklist",
        json={"event_id": event["id"], "create_tasks": True},
        headers=auth_headers()
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["source"] == "ai"
    assert [t["title"] for t in data["created_tasks"]] == ["Book venue", "101"]
    assert data["created_tasks"][0]["due_date"].startswith("2030-05-31")


def test_checklist_needs_event_to_create_tasks(client, auth_headers):
    response = client.post("/api/ai/checklist", json={"event_type": "webinar", "create_tasks": True}, headers=auth_headers())

    assert response.status_code == 400

def test_usage_is_recorded(client, auth_headers):
    headers = auth_headers()
    client.post("/api/ai/suggestions", json={"event_type": "birthday"}, headers=headers)
    client.post("/api/ai/suggestions", json={"event_type": "webinar"}, headers=headers)
    client.post("/api/ai/checklist", json={"event_type": "webinar"}, headers=headers)

    usage = client.get("/api/ai/usage", headers=headers).json()["data"]

    assert usage["total_requests"] == 3
    assert usage["by_type"] == {"suggestions": 2, "checklist": 1}
    assert usage["by_source"] == {"ai": 0, "fallback": 3}

def test_ai_rate_limit(client, auth_headers, monkeypatch):
    monkeypatch.setattr(settings, "AI_RATE_LIMIT_PER_MINUTE", 2)
    headers = auth_headers()

    for _ in range(2):
        assert client.post("/api/ai/suggestions", json={"event_type": "other"}, headers=headers).status_code == 200

    assert client.post("/api/ai/suggestions", json={"event_type": "other"}, headers=headers).status_code == 429

def add_vendor(client, headers, **fields):
    response = client.post("/api/vendors", json=fields, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]

def test_vendor_suggestions_ranked_per_category(client, auth_headers):
    admin = auth_headers("admin", is_admin=True)
    for i in range(4):
        add_vendor(client, admin, name=f"Caterer {i}", category="catering", rating=3)
    partner = add_vendor(client, admin, name="Hall One", category="venue", rating=2)
    client.put(f"/api/vendors/{partner['id']}", json={"is_partner": True}, headers=admin)
    add_vendor(client, admin, name="Downtown Loft", category="venue", rating=4, description="Rooftop in Lisbon")
    add_vendor(client, admin, name="Ferris Wheels", category="rides", rating=5)
    add_vendor(client, auth_headers(), name="Unapproved Hall", category="venue", rating=5)

    response = client.post(
        "/api/ai/suggest-vendors",
        json={"event_type": "Conference", "location": "lisbon"},
        headers=auth_headers()
    )

    assert response.status_code == 200
    data = response.json()["data"]
    suggested = data["suggested_vendors"]
    assert set(suggested) == {"catering", "venue"}
    assert len(suggested["catering"]) == 3
    assert [vendor["name"] for vendor in suggested["venue"]] == ["Downtown Loft", "Hall One"]
    assert suggested["venue"][0]["score"] == 55
    assert data["total_suggestions"] == 5

def test_vendor_suggestions_when_none_match(client, auth_headers):
    response = client.post("/api/ai/suggest-vendors", json={"event_type": "wedding"}, headers=auth_headers())

    assert response.status_code == 404
    assert response.json()["error_code"] == "NOT_FOUND"

def test_timeline_endpoint(client, auth_headers, create_event):
    event = create_event()
    headers = auth_headers()

    response = client.post(
        "/api/ai/generate-timeline",
        json={
            "event_type": "birthday",
            "event_id": event["id"],
            "start_time": "2030-06-30T18:00:00Z",
            "end_time": "2030-06-30T23:00:00Z",
            "include_setup": False,
        },
        headers=headers
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["duration"] == 5.0
    assert data["items"][0]["title"] == "Guest Arrival"
    assert data["items"][0]["start_time"].startswith("2030-06-30T18:00")
    assert data["items"][-1]["title"] == "Music & Dancing"

    usage = client.get("/api/ai/usage", headers=headers).json()["data"]
    assert usage["by_type"] == {"timeline": 1}
    assert usage["by_source"]["rules"] == 1

def test_timeline_rejects_inverted_range(client, auth_headers):
    response = client.post(
        "/api/ai/generate-timeline",
        json={"event_type": "conference", "start_time": "2030-06-30T17:00:00Z", "end_time": "2030-06-30T09:00:00Z"},
        headers=auth_headers()
    )

    assert response.status_code == 400
    assert response.json()["message"] == "End time must be after start time"

def test_timeline_custom_activity_times_validated(client, auth_headers):
    response = client.post(
        "/api/ai/generate-timeline",
        json={
            "event_type": "conference",
            "start_time": "2030-06-30T09:00:00Z",
            "end_time": "2030-06-30T17:00:00Z",
            "custom_activities": [
                {"title": "Panel", "start_time": "2030-06-30T12:00:00Z", "end_time": "2030-06-30T11:00:00Z"}
            ],
        },
        headers=auth_headers()
    )

    assert response.status_code == 422
