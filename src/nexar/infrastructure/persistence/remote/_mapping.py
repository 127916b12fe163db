"""Helpers for turning raw rows into domain values."""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping
from uuid import UUID

from nexar.domain.shared.exceptions import MalformedRowError
from nexar.domain.shared.time import parse_timestamp, utc_now


def required(row: Mapping[str, Any], key: str, collection: str) -> Any:
    value = row.get(key)
    if value is None:
        raise MalformedRowError(collection, f"missing {key}")
    return value


def as_uuid(value: Any, collection: str, key: str) -> UUID:
    try:
        return value if isinstance(value, UUID) else UUID(str(value))
    except ValueError as e:
        raise MalformedRowError(collection, f"invalid {key}: {value!r}") from e


def as_decimal(value: Any, collection: str, key: str) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError) as e:
        raise MalformedRowError(collection, f"invalid {key}: {value!r}") from e


def as_timestamp(value: Any, collection: str, key: str) -> datetime:
    if value is None:
        return utc_now()
    try:
        parsed = parse_timestamp(value)
    except (AttributeError, TypeError, ValueError) as e:
        raise MalformedRowError(collection, f"invalid {key}: {value!r}") from e
    return parsed or utc_now()


def as_int(value: Any, collection: str, key: str) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError) as e:
        raise MalformedRowError(collection, f"invalid {key}: {value!r}") from e
