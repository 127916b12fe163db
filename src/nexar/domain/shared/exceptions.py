"""Shared domain exceptions and error codes.

This module defines the base exception hierarchy and error codes for the
entire client. All exceptions raised by services, repositories and gateway
adapters inherit from DomainException so public operations can turn them
into a uniform result shape.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for callers.

    These codes are part of the public contract. Should not be changed.
    """

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    MALFORMED_ROW = "MALFORMED_ROW"

    # Not Found Errors
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    LISTING_NOT_FOUND = "LISTING_NOT_FOUND"

    # Identity / Profile
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    ADMIN_REQUIRED = "ADMIN_REQUIRED"
    PROFILE_REQUIRED = "PROFILE_REQUIRED"
    PROFILE_CREATION_FAILED = "PROFILE_CREATION_FAILED"

    # Listings
    LISTING_CREATION_FAILED = "LISTING_CREATION_FAILED"
    LISTING_UPDATE_FAILED = "LISTING_UPDATE_FAILED"
    LISTING_DELETE_FAILED = "LISTING_DELETE_FAILED"
    ASSET_UPLOAD_FAILED = "ASSET_UPLOAD_FAILED"

    # Conflict Errors
    CONFLICT = "CONFLICT"

    # Business Rule Violations
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"

    # Remote service
    REMOTE_UNAVAILABLE = "REMOTE_UNAVAILABLE"
    REMOTE_REQUEST_FAILED = "REMOTE_REQUEST_FAILED"
    REMOTE_AUTH_FAILED = "REMOTE_AUTH_FAILED"

    # Concurrency Errors
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"

    # General Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base exception for all client errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not shown to users)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(DomainException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class MalformedRowError(ValidationError):
    """Raised when a row returned by the remote service cannot be mapped."""

    def __init__(self, collection: str, reason: str) -> None:
        super().__init__(
            message=f"Malformed {collection} row: {reason}",
            code=ErrorCode.MALFORMED_ROW,
            details={"collection": collection, "reason": reason},
        )


class BusinessRuleViolation(DomainException):
    """Raised when a business rule or domain invariant is violated."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.BUSINESS_RULE_VIOLATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EntityNotFoundError(DomainException):
    """Raised when a requested entity cannot be found."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConflictError(DomainException):
    """Raised when an operation conflicts with existing state."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFLICT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConcurrencyError(DomainException):
    """Raised when concurrent modifications conflict."""

    def __init__(
        self,
        message: str = "The resource was modified by another client",
        code: ErrorCode = ErrorCode.CONCURRENCY_CONFLICT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class AuthorizationError(DomainException):
    """Raised when the caller lacks the identity or rights for an operation."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ADMIN_REQUIRED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


# -----------------------------------------------------------------------------
# Remote service errors
# -----------------------------------------------------------------------------


class RemoteError(DomainException):
    """Base for failures reported by (or while reaching) the hosted service."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.REMOTE_REQUEST_FAILED,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
        self.status_code = status_code


class RemoteUnavailableError(RemoteError):
    """Network or service-level failure (connection, timeout, 5xx)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(
            message,
            code=ErrorCode.REMOTE_UNAVAILABLE,
            status_code=status_code,
        )


class RemoteRequestError(RemoteError):
    """The service rejected a request (4xx)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.REMOTE_REQUEST_FAILED,
            status_code=status_code,
            details=details,
        )


class RemoteConflictError(RemoteRequestError):
    """The service reported a uniqueness or state conflict (409)."""


class RemoteAuthError(RemoteError):
    """Invalid credentials or an expired/invalid auth session."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(
            message,
            code=ErrorCode.REMOTE_AUTH_FAILED,
            status_code=status_code,
        )
