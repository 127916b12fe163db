from nexar.domain.messaging.message import Message
from nexar.domain.messaging.message_repository import MessageRepository

__all__ = [
    "Message",
    "MessageRepository",
]
