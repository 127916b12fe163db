"""Row store implementation of MessageRepository."""

from typing import Any, Mapping, Optional
from uuid import UUID

from nexar.application.ports import Filter, OrderBy, RowStorePort
from nexar.domain.messaging import Message, MessageRepository
from nexar.infrastructure.persistence.remote._mapping import (
    as_timestamp,
    as_uuid,
    required,
)

MESSAGES = "messages"


class MessageRepositoryRemote(MessageRepository):
    def __init__(self, rows: RowStorePort) -> None:
        self._rows = rows

    async def insert(self, message: Message) -> Message:
        row = await self._rows.insert(
            MESSAGES,
            {
                "id": message.id,
                "sender_id": message.sender_id,
                "receiver_id": message.receiver_id,
                "listing_id": message.listing_id,
                "subject": message.subject,
                "content": message.content,
                "read": message.read,
                "created_at": message.created_at,
            },
        )
        return self._map_to_domain(row)

    async def list_for_participant(self, participant_id: UUID) -> list[Message]:
        rows = await self._rows.select(
            MESSAGES,
            any_of=[
                Filter.eq("sender_id", participant_id),
                Filter.eq("receiver_id", participant_id),
            ],
            order_by=OrderBy("created_at", descending=True),
        )
        return [self._map_to_domain(row) for row in rows]

    async def mark_read(self, message_id: UUID) -> Optional[Message]:
        rows = await self._rows.update(
            MESSAGES,
            {"read": True},
            filters=[Filter.eq("id", message_id)],
        )
        if not rows:
            return None
        return self._map_to_domain(rows[0])

    def _map_to_domain(self, row: Mapping[str, Any]) -> Message:
        def uuid_field(key: str) -> UUID:
            return as_uuid(required(row, key, MESSAGES), MESSAGES, key)

        return Message(
            id=uuid_field("id"),
            sender_id=uuid_field("sender_id"),
            receiver_id=uuid_field("receiver_id"),
            listing_id=uuid_field("listing_id"),
            content=row.get("content") or "",
            subject=row.get("subject"),
            read=bool(row.get("read")),
            created_at=as_timestamp(row.get("created_at"), MESSAGES, "created_at"),
        )
