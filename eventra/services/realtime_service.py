"""
Real-time change notifications for clients viewing an event
"""

from datetime import datetime
from typing import Any, Dict

from eventra.api.ws import WebSocketManager, websocket_manager

class EventBroadcaster:
    """Pushes event, task and guest changes to connected clients"""

    def __init__(self, websocket_manager: WebSocketManager):
        self.websocket_manager = websocket_manager

    async def _send(self, event_id: int, message_type: str, data: Dict[str, Any]) -> None:
        message = {
            "type": message_type,
            "event_id": event_id,
            "data": data,
            "timestamp": datetime.utcnow().isoformat()
        }
        await self.websocket_manager.broadcast_to_event(event_id, message)

    async def event_updated(self, event_id: int, event: Dict[str, Any]) -> None:
        await self._send(event_id, "event_update", event)

    async def task_created(self, event_id: int, task: Dict[str, Any]) -> None:
        await self._send(event_id, "task_create", task)

    async def task_updated(self, event_id: int, task: Dict[str, Any]) -> None:
        await self._send(event_id, "task_update", task)

    async def task_deleted(self, event_id: int, task_id: int) -> None:
        await self._send(event_id, "task_delete", {"id": task_id})

    async def guest_created(self, event_id: int, guest: Dict[str, Any]) -> None:
        await self._send(event_id, "guest_create", guest)

    async def guest_updated(self, event_id: int, guest: Dict[str, Any]) -> None:
        await self._send(event_id, "guest_update", guest)

    async def guest_deleted(self, event_id: int, guest_id: int) -> None:
        await self._send(event_id, "guest_delete", {"id": guest_id})

    async def guests_imported(self, event_id: int, count: int) -> None:
        await self._send(event_id, "guest_update", {"imported": count})

broadcaster = EventBroadcaster(websocket_manager)
