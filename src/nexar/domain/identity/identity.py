"""Identity - the auth subsystem's account record as seen by the client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any
from uuid import UUID


@dataclass(frozen=True)
class Identity:
    """Immutable view of an authenticated account.

    Created and owned by the auth subsystem. The client never references
    ``Identity.id`` from listings or messages; those point at the Profile.
    """

    id: UUID
    email: str | None
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Read-only view; metadata is owned by the auth subsystem
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def email_local_part(self) -> str | None:
        if not self.email:
            return None
        local = self.email.split("@", 1)[0]
        return local or None

    def metadata_value(self, *keys: str) -> Any | None:
        """Return the first non-empty metadata value among ``keys``."""
        for key in keys:
            value = self.metadata.get(key)
            if value not in (None, ""):
                return value
        return None

    def has_email(self, email: str) -> bool:
        """Case-insensitive email comparison."""
        if not self.email:
            return False
        return self.email.strip().lower() == email.strip().lower()

    def __str__(self) -> str:
        return f"Identity({self.email})"
