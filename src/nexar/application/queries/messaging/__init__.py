from nexar.application.queries.messaging.list_conversations_query import (
    ListConversationsQuery,
)

__all__ = ["ListConversationsQuery"]
