"""Message entity - append-only correspondence about a listing."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from nexar.domain.shared.exceptions import ValidationError
from nexar.domain.shared.time import utc_now


@dataclass
class Message:
    id: UUID
    sender_id: UUID
    receiver_id: UUID
    listing_id: UUID
    content: str
    subject: str | None = None
    read: bool = False
    created_at: datetime = field(default_factory=utc_now)

    @classmethod
    def compose(
        cls,
        sender_id: UUID,
        receiver_id: UUID,
        listing_id: UUID,
        content: str,
        subject: str | None = None,
    ) -> Message:
        if not content or not content.strip():
            msg = "Message content cannot be empty"
            raise ValidationError(msg)
        return cls(
            id=uuid4(),
            sender_id=sender_id,
            receiver_id=receiver_id,
            listing_id=listing_id,
            content=content,
            subject=subject,
        )

    def involves(self, profile_id: UUID) -> bool:
        return profile_id in (self.sender_id, self.receiver_id)
