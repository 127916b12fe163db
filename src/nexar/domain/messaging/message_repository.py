"""Message repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from nexar.domain.messaging.message import Message


class MessageRepository(ABC):
    """Repository interface for Message entities."""

    @abstractmethod
    async def insert(self, message: Message) -> Message:
        """Store a new message and return the stored row."""

    @abstractmethod
    async def list_for_participant(self, participant_id: UUID) -> list[Message]:
        """Messages sent or received by ``participant_id``, newest first."""

    @abstractmethod
    async def mark_read(self, message_id: UUID) -> Optional[Message]:
        """Flag a message as read; None when it does not exist."""
