"""
Tests for WebSocket connections and change broadcasts
"""

import asyncio
import json

import pytest
from starlette.websockets import WebSocketDisconnect

from eventra.api.ws import WebSocketManager
from eventra.services.realtime_service import EventBroadcaster

class FakeWebSocket:
    def __init__(self, fail=False):
        self.fail = fail
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_text(self, text):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(json.loads(text))

def test_broadcast_reaches_event_room_only():
    async def scenario():
        manager = WebSocketManager()
        watcher, other = FakeWebSocket(), FakeWebSocket()
        await manager.connect(watcher, 1)
        await manager.connect(other, 2)

        await EventBroadcaster(manager).task_created(1, {"id": 7, "title": "Book venue"})
        return watcher, other

    watcher, other = asyncio.run(scenario())

    assert watcher.accepted
    assert len(watcher.sent) == 1
    message = watcher.sent[0]
    assert message["type"] == "task_create"
    assert message["event_id"] == 1
    assert message["data"]["title"] == "Book venue"
    assert "timestamp" in message
    assert other.sent == []

def test_failed_socket_is_dropped():
    async def scenario():
        manager = WebSocketManager()
        healthy, broken = FakeWebSocket(), FakeWebSocket(fail=True)
        await manager.connect(healthy, 5)
        await manager.connect(broken, 5)

        await EventBroadcaster(manager).guest_deleted(5, 3)
        return manager, healthy

    manager, healthy = asyncio.run(scenario())

    assert manager.get_connection_count(5) == 1
    assert healthy.sent[0]["type"] == "guest_delete"
    assert healthy.sent[0]["data"] == {"id": 3}

def test_empty_rooms_are_removed():
    async def scenario():
        manager = WebSocketManager()
        socket = FakeWebSocket()
        await manager.connect(socket, 9)
        manager.disconnect(socket, 9)
        manager.disconnect(socket, 9)
        return manager

    manager = asyncio.run(scenario())

    assert manager.get_all_connection_counts() == {}

def test_websocket_welcome_and_ping(client, auth_headers, create_event):
    event = create_event()
    token = auth_headers()["Authorization"].split(" ", 1)[1]

    with client.websocket_connect(f"/ws/events/{event['id']}?token={token}") as websocket:
        welcome = websocket.receive_json()
        assert welcome["type"] == "connection"
        assert welcome["event_id"] == event["id"]
        assert welcome["connection_count"] == 1

        websocket.send_text(json.dumps({"type": "ping", "timestamp": 123}))
        assert websocket.receive_json() == {"type": "pong", "timestamp": 123}

def test_websocket_rejects_missing_token(client, create_event):
    event = create_event()

    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect(f"/ws/events/{event['id']}"):
            pass

    assert exc.value.code == 4401

def test_websocket_rejects_inaccessible_event(client, auth_headers, create_event):
    event = create_event()
    token = auth_headers("intruder")["Authorization"].split(" ", 1)[1]

    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect(f"/ws/events/{event['id']}?token={token}"):
            pass

    assert exc.value.code == 4404

def test_websocket_stats(client):
    response = client.get("/ws/stats")

    assert response.status_code == 200
    assert response.json()["total_connections"] == 0
