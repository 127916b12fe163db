"""Session cache entry - denormalized projection of the current user."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from nexar.domain.identity import Identity
from nexar.domain.profile import DEFAULT_PROFILE_NAME, Profile, SellerType


class SessionCacheEntry(BaseModel):
    """What the UI shows for the signed-in user.

    Serialized with camelCase keys. Always rebuildable from the Profile (or,
    in degraded mode, from the Identity alone), so it can be discarded at
    any time.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: UUID
    name: str
    email: str | None = None
    seller_type: SellerType = Field(default=SellerType.INDIVIDUAL, alias="sellerType")
    is_admin: bool = Field(default=False, alias="isAdmin")
    is_logged_in: bool = Field(default=True, alias="isLoggedIn")

    @classmethod
    def from_profile(
        cls,
        identity: Identity,
        profile: Profile,
        bootstrap_admin_email: str,
    ) -> SessionCacheEntry:
        return cls(
            id=identity.id,
            name=profile.name,
            email=profile.email,
            seller_type=profile.seller_type,
            is_admin=profile.is_admin or identity.has_email(bootstrap_admin_email),
            is_logged_in=True,
        )

    @classmethod
    def from_identity(
        cls,
        identity: Identity,
        bootstrap_admin_email: str,
    ) -> SessionCacheEntry:
        """Explicit defaults used when the profile is unavailable."""
        return cls(
            id=identity.id,
            name=identity.email_local_part or DEFAULT_PROFILE_NAME,
            email=identity.email,
            seller_type=SellerType.INDIVIDUAL,
            is_admin=identity.has_email(bootstrap_admin_email),
            is_logged_in=True,
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, data: str | bytes) -> SessionCacheEntry:
        return cls.model_validate_json(data)
