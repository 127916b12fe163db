from nexar.infrastructure.session.local_session_store import (
    SESSION_ENTRY_KEY,
    LocalSessionStore,
)
from nexar.infrastructure.session.local_storage import (
    JsonFileStorage,
    LocalStorage,
    MemoryStorage,
)

__all__ = [
    "SESSION_ENTRY_KEY",
    "JsonFileStorage",
    "LocalSessionStore",
    "LocalStorage",
    "MemoryStorage",
]
