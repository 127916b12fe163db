"""Profile aggregate - the application's own record about a user."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from nexar.domain.identity import Identity
from nexar.domain.profile.value_objects import ProfileHints, SellerType
from nexar.domain.shared.time import utc_now

DEFAULT_PROFILE_NAME = "User"


@dataclass
class Profile:
    """
    Profile aggregate root.

    Exactly one Profile exists per Identity (``user_id`` is unique). ``id`` is
    a surrogate key distinct from ``Identity.id``; listings and messages use
    it as ``seller_id`` and never reference the identity directly.
    """

    id: UUID
    user_id: UUID
    name: str
    email: str | None
    seller_type: SellerType = SellerType.INDIVIDUAL
    phone: str | None = None
    location: str | None = None
    avatar_url: str | None = None
    verified: bool = False
    is_admin: bool = False
    suspended: bool = False
    created_at: datetime = field(default_factory=utc_now)

    @property
    def is_dealer(self) -> bool:
        return self.seller_type == SellerType.DEALER

    @classmethod
    def for_identity(
        cls,
        identity: Identity,
        bootstrap_admin_email: str,
        hints: ProfileHints | None = None,
    ) -> Profile:
        """Build a new profile for an identity that has none yet.

        Each field is taken from the first source that has it:
        ``hints``, then the identity's metadata, then a derived default
        (email local part for the name, ``individual`` for the seller type).
        Admin rights are granted only to the bootstrap administrator address.
        """
        hints = hints or ProfileHints()

        name = (
            hints.name
            or identity.metadata_value("name")
            or identity.email_local_part
            or DEFAULT_PROFILE_NAME
        )
        seller_type = hints.seller_type or _seller_type_from_metadata(identity)

        return cls(
            id=uuid4(),
            user_id=identity.id,
            name=str(name),
            email=identity.email,
            seller_type=seller_type,
            phone=hints.phone or identity.metadata_value("phone"),
            location=hints.location or identity.metadata_value("location"),
            verified=False,
            is_admin=identity.has_email(bootstrap_admin_email),
        )

    def __repr__(self) -> str:
        return f"Profile(id={self.id}, user_id={self.user_id}, email={self.email!r})"


def _seller_type_from_metadata(identity: Identity) -> SellerType:
    raw = identity.metadata_value("sellerType", "seller_type")
    if raw is None:
        return SellerType.INDIVIDUAL
    try:
        return SellerType(raw)
    except ValueError:
        return SellerType.INDIVIDUAL
