from __future__ import annotations

import threading
from typing import Any, Protocol


class Connection(Protocol):
    async def send_json(self, data: Any) -> None:
        """Deliver one JSON-serializable frame."""


class PresenceRegistry(Protocol):
    def register(self, user_id: str, connection: Connection) -> None:
        """Map ``user_id`` to its live connection; a later registration replaces an earlier one."""

    def lookup(self, user_id: str) -> Connection | None:
        """Return the live connection for ``user_id``, if any."""

    def unregister(self, connection: Connection) -> str | None:
        """Drop ``connection`` and return the user it belonged to."""

    def online_users(self) -> list[str]:
        """User ids currently connected, in registration order."""

    def connections(self) -> list[Connection]:
        """Every live connection, for broadcasts."""


class InMemoryPresenceRegistry(PresenceRegistry):
    """Single-process registry; presence is lost on restart."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_user: dict[str, Connection] = {}

    def register(self, user_id: str, connection: Connection) -> None:
        with self._lock:
            self._by_user.pop(user_id, None)
            self._by_user[user_id] = connection

    def lookup(self, user_id: str) -> Connection | None:
        with self._lock:
            return self._by_user.get(user_id)

    def unregister(self, connection: Connection) -> str | None:
        with self._lock:
            for user_id, registered in self._by_user.items():
                if registered is connection:
                    del self._by_user[user_id]
                    return user_id
        return None

    def online_users(self) -> list[str]:
        with self._lock:
            return list(self._by_user)

    def connections(self) -> list[Connection]:
        with self._lock:
            return list(self._by_user.values())

    def clear(self) -> None:
        with self._lock:
            self._by_user.clear()
