"""Send a message about a listing to its seller."""

import logging
from typing import Optional
from uuid import UUID

from nexar.application.services import IdentityProfileSynchronizer
from nexar.domain.identity import NotAuthenticatedError
from nexar.domain.listing import ListingNotFoundError, ListingRepository
from nexar.domain.messaging import Message, MessageRepository
from nexar.domain.profile import ProfileRequiredError

logger = logging.getLogger(__name__)


class SendMessageCommand:
    """
    Command to send a message about a listing.

    Sender and receiver are Profile ids. The receiver defaults to the
    listing's seller.
    """

    def __init__(
        self,
        synchronizer: IdentityProfileSynchronizer,
        message_repository: MessageRepository,
        listing_repository: ListingRepository,
    ):
        self._synchronizer = synchronizer
        self._message_repo = message_repository
        self._listing_repo = listing_repository

    async def execute(
        self,
        listing_id: UUID,
        content: str,
        subject: Optional[str] = None,
        receiver_id: Optional[UUID] = None,
    ) -> Message:
        identity = await self._synchronizer.current_identity()
        if identity is None:
            raise NotAuthenticatedError("send a message")

        sender = await self._synchronizer.find_profile(identity)
        if sender is None:
            raise ProfileRequiredError(identity.id)

        if receiver_id is None:
            listing = await self._listing_repo.find_by_id(listing_id)
            if listing is None:
                raise ListingNotFoundError(listing_id)
            receiver_id = listing.seller_id

        message = Message.compose(
            sender_id=sender.id,
            receiver_id=receiver_id,
            listing_id=listing_id,
            content=content,
            subject=subject,
        )
        stored = await self._message_repo.insert(message)
        logger.info("Message %s sent about listing %s", stored.id, listing_id)
        return stored
