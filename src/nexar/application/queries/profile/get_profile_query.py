from typing import Optional
from uuid import UUID

from nexar.domain.profile import Profile, ProfileRepository


class GetProfileQuery:
    """Query for the profile of an identity (no implicit creation)."""

    def __init__(self, profile_repository: ProfileRepository):
        self._profile_repo = profile_repository

    async def execute(self, user_id: UUID) -> Optional[Profile]:
        return await self._profile_repo.find_by_user_id(user_id)
