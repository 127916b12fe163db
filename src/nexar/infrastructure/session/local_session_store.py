import logging

from pydantic import ValidationError

from nexar.application.dtos import SessionCacheEntry
from nexar.application.ports import SessionStorePort
from nexar.infrastructure.session.local_storage import LocalStorage

logger = logging.getLogger(__name__)

SESSION_ENTRY_KEY = "user"


class LocalSessionStore(SessionStorePort):
    """Session cache entry kept under the well-known ``user`` key."""

    def __init__(self, storage: LocalStorage):
        self._storage = storage

    def get(self) -> SessionCacheEntry | None:
        raw = self._storage.get_item(SESSION_ENTRY_KEY)
        if raw is None:
            return None
        try:
            return SessionCacheEntry.from_json(raw)
        except ValidationError as e:
            # Disposable projection: drop it and let the next sign-in rebuild it
            logger.warning("Discarding unreadable session cache entry: %s", e)
            self._storage.remove_item(SESSION_ENTRY_KEY)
            return None

    def set(self, entry: SessionCacheEntry) -> None:
        self._storage.set_item(SESSION_ENTRY_KEY, entry.to_json())

    def clear(self) -> None:
        self._storage.remove_item(SESSION_ENTRY_KEY)

    def clear_all(self) -> None:
        self._storage.clear()
