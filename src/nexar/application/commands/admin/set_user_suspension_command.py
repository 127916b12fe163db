import logging
from uuid import UUID

from nexar.application.services import AdminPrivilegeResolver
from nexar.domain.profile import Profile, ProfileRepository
from nexar.domain.shared.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class SetUserSuspensionCommand:
    """Command to suspend or reactivate a user's profile."""

    def __init__(
        self,
        privilege_resolver: AdminPrivilegeResolver,
        profile_repository: ProfileRepository,
    ):
        self._privileges = privilege_resolver
        self._profile_repo = profile_repository

    async def execute(self, user_id: UUID, suspended: bool) -> Profile:
        await self._privileges.require_admin()

        profile = await self._profile_repo.update(user_id, {"suspended": suspended})
        if profile is None:
            msg = f"No profile for user '{user_id}'"
            raise EntityNotFoundError(msg, details={"user_id": str(user_id)})

        logger.info(
            "User %s %s", user_id, "suspended" if suspended else "reactivated"
        )
        return profile
