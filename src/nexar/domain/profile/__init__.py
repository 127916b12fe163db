"""Profile domain - the application's record about a user.

Design notes:
- Profiles are created lazily (sign-up, sign-in or explicit repair)
- ``Profile.id`` is the key other records use as ``seller_id``
- Repository interface defined here, implementation in infrastructure
"""

from nexar.domain.profile.aggregates import DEFAULT_PROFILE_NAME, Profile
from nexar.domain.profile.exceptions import (
    ProfileCreationFailedError,
    ProfileRequiredError,
)
from nexar.domain.profile.repositories import ProfileRepository
from nexar.domain.profile.value_objects import ProfileHints, SellerType

__all__ = [
    "DEFAULT_PROFILE_NAME",
    "Profile",
    "ProfileCreationFailedError",
    "ProfileHints",
    "ProfileRepository",
    "ProfileRequiredError",
    "SellerType",
]
