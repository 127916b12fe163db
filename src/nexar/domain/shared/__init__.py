from nexar.domain.shared.exceptions import (
    AuthorizationError,
    BusinessRuleViolation,
    ConcurrencyError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    MalformedRowError,
    RemoteAuthError,
    RemoteConflictError,
    RemoteError,
    RemoteRequestError,
    RemoteUnavailableError,
    ValidationError,
)
from nexar.domain.shared.time import ensure_tz_aware, parse_timestamp, utc_now

__all__ = [
    "AuthorizationError",
    "BusinessRuleViolation",
    "ConcurrencyError",
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "MalformedRowError",
    "RemoteAuthError",
    "RemoteConflictError",
    "RemoteError",
    "RemoteRequestError",
    "RemoteUnavailableError",
    "ValidationError",
    "ensure_tz_aware",
    "parse_timestamp",
    "utc_now",
]
