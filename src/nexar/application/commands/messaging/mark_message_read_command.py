from uuid import UUID

from nexar.domain.messaging import Message, MessageRepository
from nexar.domain.shared.exceptions import EntityNotFoundError


class MarkMessageReadCommand:
    """Command to flag a received message as read."""

    def __init__(self, message_repository: MessageRepository):
        self._message_repo = message_repository

    async def execute(self, message_id: UUID) -> Message:
        message = await self._message_repo.mark_read(message_id)
        if message is None:
            msg = f"Message '{message_id}' not found"
            raise EntityNotFoundError(msg, details={"message_id": str(message_id)})
        return message
