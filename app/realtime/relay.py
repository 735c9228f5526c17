from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from .presence import Connection, PresenceRegistry

logger = logging.getLogger(__name__)


class RelayEvent(BaseModel):
    event: str = Field(min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)


class ChatRelay:
    """Routes client events to the recipient's live connection.

    Delivery is best effort: events for offline users are dropped and nothing
    is persisted.
    """

    def __init__(self, presence: PresenceRegistry) -> None:
        self.presence = presence
        self._handlers = {
            "setup": self._on_setup,
            "send_message": self._on_send_message,
            "typing": self._on_typing,
            "stop_typing": self._on_stop_typing,
            "new_notification": self._on_new_notification,
        }

    async def handle(self, connection: Connection, raw: Any) -> None:
        try:
            event = RelayEvent.model_validate(raw)
        except ValidationError:
            await self._send(connection, "error", {"message": "Malformed event."})
            return
        handler = self._handlers.get(event.event)
        if handler is None:
            await self._send(connection, "error", {"message": f"Unknown event '{event.event}'."})
            return
        await handler(connection, event.data)

    async def disconnect(self, connection: Connection) -> None:
        user_id = self.presence.unregister(connection)
        if user_id is None:
            return
        logger.info("chat_disconnected user=%s online=%d", user_id, len(self.presence.online_users()))
        await self._broadcast_online_users()

    async def _on_setup(self, connection: Connection, data: dict[str, Any]) -> None:
        user_id = str(data.get("user_id") or "").strip()
        if not user_id:
            await self._send(connection, "error", {"message": "setup requires user_id."})
            return
        self.presence.register(user_id, connection)
        logger.info("chat_connected user=%s online=%d", user_id, len(self.presence.online_users()))
        await self._broadcast_online_users()

    async def _on_send_message(self, connection: Connection, data: dict[str, Any]) -> None:
        await self._deliver(
            data.get("receiver_id"),
            "receive_message",
            {
                "sender_id": data.get("sender_id"),
                "sender_name": data.get("sender_name"),
                "sender_pic": data.get("sender_pic"),
                "message": data.get("message"),
                "created_at": datetime.now(timezone.utc).isoformat(),
            },
        )

    async def _on_typing(self, connection: Connection, data: dict[str, Any]) -> None:
        await self._deliver(data.get("receiver_id"), "user_typing", {"sender_id": data.get("sender_id")})

    async def _on_stop_typing(self, connection: Connection, data: dict[str, Any]) -> None:
        await self._deliver(data.get("receiver_id"), "user_stopped_typing", {"sender_id": data.get("sender_id")})

    async def _on_new_notification(self, connection: Connection, data: dict[str, Any]) -> None:
        await self._deliver(data.get("user_id"), "receive_notification", data.get("notification"))

    async def _deliver(self, user_id: Any, event: str, payload: Any) -> None:
        target = self.presence.lookup(str(user_id)) if user_id else None
        if target is None:
            logger.debug("chat_dropped event=%s user=%s", event, user_id)
            return
        await self._send(target, event, payload)

    async def _broadcast_online_users(self) -> None:
        online = self.presence.online_users()
        for connection in self.presence.connections():
            await self._send(connection, "online_users", online)

    async def _send(self, connection: Connection, event: str, payload: Any) -> None:
        try:
            await connection.send_json({"event": event, "data": payload})
        except Exception as exc:
            logger.warning("chat_send_failed event=%s error=%s", event, exc)
