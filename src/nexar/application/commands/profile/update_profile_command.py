"""Partial profile update by identity id."""

import logging
from typing import Any
from uuid import UUID

from nexar.domain.profile import Profile, ProfileRepository, SellerType
from nexar.domain.shared.exceptions import EntityNotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Admin, verification and suspension flags are never user-editable
EDITABLE_PROFILE_FIELDS = frozenset(
    {"name", "phone", "location", "seller_type", "avatar_url"}
)


class UpdateProfileCommand:
    """Command to update the user-editable fields of a profile."""

    def __init__(self, profile_repository: ProfileRepository):
        self._profile_repo = profile_repository

    async def execute(self, user_id: UUID, **changes: Any) -> Profile:
        values = self._validate(changes)

        profile = await self._profile_repo.update(user_id, values)
        if profile is None:
            msg = f"No profile for user '{user_id}'"
            raise EntityNotFoundError(msg, details={"user_id": str(user_id)})

        logger.info("Profile updated for %s: %s", user_id, ", ".join(sorted(values)))
        return profile

    def _validate(self, changes: dict[str, Any]) -> dict[str, Any]:
        if not changes:
            msg = "Nothing to update"
            raise ValidationError(msg)

        unknown = set(changes) - EDITABLE_PROFILE_FIELDS
        if unknown:
            msg = f"Fields cannot be updated: {', '.join(sorted(unknown))}"
            raise ValidationError(msg, details={"fields": sorted(unknown)})

        values = dict(changes)
        if "name" in values and not (values["name"] or "").strip():
            msg = "Profile name cannot be empty"
            raise ValidationError(msg)

        if "seller_type" in values:
            try:
                values["seller_type"] = SellerType(values["seller_type"])
            except ValueError as e:
                msg = f"Unknown seller type: {values['seller_type']}"
                raise ValidationError(msg) from e
        return values
