"""Session store port - the local "current user" cache.

The cache is a disposable projection of the Profile kept for immediate UI
responsiveness. It is never consulted for authorization decisions.
"""

from abc import ABC, abstractmethod

from nexar.application.dtos.session_entry import SessionCacheEntry


class SessionStorePort(ABC):
    """Injectable, write-through store for the session cache entry."""

    @abstractmethod
    def get(self) -> SessionCacheEntry | None:
        """The cached entry; None means logged out from the client's view."""

    @abstractmethod
    def set(self, entry: SessionCacheEntry) -> None:
        """Overwrite the cached entry."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the cached entry."""

    @abstractmethod
    def clear_all(self) -> None:
        """Remove every piece of locally persisted client state."""
