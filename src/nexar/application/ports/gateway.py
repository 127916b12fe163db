"""Remote Data Gateway ports.

These abstract the hosted service's authentication, row storage and blob
storage primitives. Adapters only shape calls: every method either returns
its typed result or raises a ``RemoteError`` subclass. No method spans more
than one remote call, and nothing here is transactional across calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Sequence

from nexar.domain.identity import Identity


class FilterOperator(str, Enum):
    """Row predicates supported by the row storage service."""

    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    ILIKE = "ilike"
    IN = "in"


@dataclass(frozen=True)
class Filter:
    """A single ``column <operator> value`` predicate."""

    column: str
    operator: FilterOperator
    value: Any

    @classmethod
    def eq(cls, column: str, value: Any) -> Filter:
        return cls(column, FilterOperator.EQ, value)

    @classmethod
    def gte(cls, column: str, value: Any) -> Filter:
        return cls(column, FilterOperator.GTE, value)

    @classmethod
    def lte(cls, column: str, value: Any) -> Filter:
        return cls(column, FilterOperator.LTE, value)

    @classmethod
    def ilike(cls, column: str, pattern: str) -> Filter:
        return cls(column, FilterOperator.ILIKE, pattern)

    @classmethod
    def contains_text(cls, column: str, text: str) -> Filter:
        """Case-insensitive substring match."""
        return cls(column, FilterOperator.ILIKE, f"%{text}%")


@dataclass(frozen=True)
class OrderBy:
    column: str
    descending: bool = False


class RowStorePort(ABC):
    """Port for the row storage primitives (named collections of rows)."""

    @abstractmethod
    async def select(
        self,
        collection: str,
        *,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        any_of: Sequence[Filter] = (),
        order_by: OrderBy | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Rows matching all ``filters`` and, if given, any of ``any_of``."""

    @abstractmethod
    async def select_one(
        self,
        collection: str,
        *,
        columns: str = "*",
        filters: Sequence[Filter] = (),
    ) -> dict[str, Any] | None:
        """The single matching row, or None when no row matches.

        Zero rows is not an error; a failed request is.
        """

    @abstractmethod
    async def insert(
        self,
        collection: str,
        row: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Insert one row and return it as stored."""

    @abstractmethod
    async def update(
        self,
        collection: str,
        values: Mapping[str, Any],
        *,
        filters: Sequence[Filter],
    ) -> list[dict[str, Any]]:
        """Update matching rows and return them as stored (may be empty)."""

    @abstractmethod
    async def delete(
        self,
        collection: str,
        *,
        filters: Sequence[Filter],
    ) -> None:
        """Delete matching rows."""

    @abstractmethod
    async def count(
        self,
        collection: str,
        *,
        filters: Sequence[Filter] = (),
    ) -> int:
        """Number of matching rows."""


class BlobStorePort(ABC):
    """Port for the blob storage primitives."""

    @abstractmethod
    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        *,
        content_type: str | None = None,
        cache_control: str | None = None,
        upsert: bool = False,
    ) -> str:
        """Store ``content`` at ``path`` and return the stored path."""

    @abstractmethod
    def public_url(self, bucket: str, path: str) -> str:
        """Derive the public URL of a stored object (no remote call)."""

    @abstractmethod
    async def remove(self, bucket: str, paths: Sequence[str]) -> None:
        """Delete the objects at ``paths``."""

    @abstractmethod
    async def list_buckets(self) -> list[str]:
        """Names of the existing buckets."""


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    refresh_token: str | None = None
    expires_at: int | None = None


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a sign-up or sign-in call.

    ``session`` is None when the service requires email confirmation first.
    """

    identity: Identity | None
    session: AuthSession | None = None


class AuthPort(ABC):
    """Port for the authentication primitives."""

    @abstractmethod
    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Mapping[str, Any] | None = None,
    ) -> AuthResult:
        """Create an account."""

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        """Authenticate and start a session."""

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current session remotely (no-op without a session)."""

    @abstractmethod
    async def get_user(self) -> Identity | None:
        """The identity of the current session, None without a session.

        Raises ``RemoteAuthError`` when the stored session is no longer valid.
        """

    @abstractmethod
    async def reset_password_for_email(self, email: str, redirect_to: str) -> None:
        """Send a password reset email."""

    @abstractmethod
    async def update_user(
        self,
        *,
        password: str | None = None,
        email: str | None = None,
    ) -> Identity:
        """Change the current identity's password and/or email."""

    @abstractmethod
    def clear_local_session(self) -> None:
        """Forget any locally held session without a remote call."""


@dataclass(frozen=True)
class RemoteGateway:
    """The three gateway ports of one hosted-service client."""

    auth: AuthPort
    rows: RowStorePort
    blobs: BlobStorePort
