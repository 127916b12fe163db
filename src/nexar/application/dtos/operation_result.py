"""Uniform result shapes returned by public operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from nexar.domain.shared.exceptions import DomainException

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Either a populated ``data`` or a populated ``error``, never both.

    ``data`` may legitimately be None on success for operations without a
    payload (e.g. sign-out); check ``ok`` rather than ``data``.
    """

    data: T | None = None
    error: DomainException | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.data is not None:
            msg = "OperationResult cannot carry both data and an error"
            raise ValueError(msg)

    @classmethod
    def success(cls, data: T | None = None) -> OperationResult[T]:
        return cls(data=data, error=None)

    @classmethod
    def failure(cls, error: DomainException) -> OperationResult[T]:
        return cls(data=None, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T | None:
        """Return ``data`` or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.data

    def __repr__(self) -> str:
        if self.ok:
            return f"OperationResult(data={self.data!r})"
        return f"OperationResult(error={self.error!r})"


@dataclass(frozen=True)
class ActionReport:
    """Outcome of repair and connection-check operations."""

    success: bool
    message: str | None = None
    error: str | None = None

    @classmethod
    def succeeded(cls, message: str) -> ActionReport:
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, error: str) -> ActionReport:
        return cls(success=False, error=error)
