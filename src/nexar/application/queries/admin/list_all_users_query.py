from typing import Optional

from nexar.application.services import AdminPrivilegeResolver
from nexar.domain.profile import Profile, ProfileRepository


class ListAllUsersQuery:
    """Query for every profile, newest first, optionally searched by name/email."""

    def __init__(
        self,
        privilege_resolver: AdminPrivilegeResolver,
        profile_repository: ProfileRepository,
    ):
        self._privileges = privilege_resolver
        self._profile_repo = profile_repository

    async def execute(self, search: Optional[str] = None) -> list[Profile]:
        await self._privileges.require_admin()

        profiles = await self._profile_repo.list_all()
        if not search:
            return profiles

        needle = search.lower()
        return [
            p
            for p in profiles
            if needle in (p.name or "").lower() or needle in (p.email or "").lower()
        ]
