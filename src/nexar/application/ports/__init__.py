"""Application layer ports (aka interfaces)."""

from nexar.application.ports.gateway import (
    AuthPort,
    AuthResult,
    AuthSession,
    BlobStorePort,
    Filter,
    FilterOperator,
    OrderBy,
    RemoteGateway,
    RowStorePort,
)
from nexar.application.ports.session_store import SessionStorePort

__all__ = [
    "AuthPort",
    "AuthResult",
    "AuthSession",
    "BlobStorePort",
    "Filter",
    "FilterOperator",
    "OrderBy",
    "RemoteGateway",
    "RowStorePort",
    "SessionStorePort",
]
