import logging
from uuid import UUID

from nexar.application.services import ImageAssetService
from nexar.domain.listing import ImageUpload
from nexar.domain.profile import Profile, ProfileRepository
from nexar.domain.shared.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class UploadAvatarCommand:
    """Command to store a new avatar and point the profile at it.

    Unlike listing images, a failed avatar upload fails the command.
    """

    def __init__(
        self,
        profile_repository: ProfileRepository,
        avatar_images: ImageAssetService,
    ):
        self._profile_repo = profile_repository
        self._images = avatar_images

    async def execute(self, user_id: UUID, upload: ImageUpload) -> Profile:
        asset = await self._images.upload(user_id, upload)

        profile = await self._profile_repo.update(user_id, {"avatar_url": asset.url})
        if profile is None:
            msg = f"No profile for user '{user_id}'"
            raise EntityNotFoundError(msg, details={"user_id": str(user_id)})

        logger.info("Avatar updated for %s", user_id)
        return profile
