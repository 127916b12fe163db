from nexar.application.services import IdentityProfileSynchronizer
from nexar.domain.identity import NotAuthenticatedError
from nexar.domain.messaging import Message, MessageRepository
from nexar.domain.profile import ProfileRequiredError


class ListConversationsQuery:
    """Query for every message the current user sent or received."""

    def __init__(
        self,
        synchronizer: IdentityProfileSynchronizer,
        message_repository: MessageRepository,
    ):
        self._synchronizer = synchronizer
        self._message_repo = message_repository

    async def execute(self) -> list[Message]:
        identity = await self._synchronizer.current_identity()
        if identity is None:
            raise NotAuthenticatedError("read messages")

        profile = await self._synchronizer.find_profile(identity)
        if profile is None:
            raise ProfileRequiredError(identity.id)

        return await self._message_repo.list_for_participant(profile.id)
