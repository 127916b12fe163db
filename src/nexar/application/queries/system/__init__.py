from nexar.application.queries.system.connection_check_query import (
    REQUIRED_COLLECTIONS,
    ConnectionCheckQuery,
)

__all__ = [
    "REQUIRED_COLLECTIONS",
    "ConnectionCheckQuery",
]
