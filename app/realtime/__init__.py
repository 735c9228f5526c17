from .presence import Connection, InMemoryPresenceRegistry, PresenceRegistry
from .relay import ChatRelay, RelayEvent

__all__ = ["Connection", "InMemoryPresenceRegistry", "PresenceRegistry", "ChatRelay", "RelayEvent"]
