"""Listing domain - marketplace items owned by profiles.

Design notes:
- ``seller_id`` references Profile.id, never Identity.id
- Images live under the owning profile's storage namespace
- Status graph: pending -> active | rejected, active <-> sold
"""

from nexar.domain.listing.aggregates import Listing
from nexar.domain.listing.exceptions import (
    AssetUploadFailedError,
    InvalidStatusTransitionError,
    ListingCreationFailedError,
    ListingDeleteFailedError,
    ListingNotFoundError,
    ListingUpdateConflictError,
    ListingUpdateFailedError,
)
from nexar.domain.listing.repositories import ListingRepository
from nexar.domain.listing.value_objects import (
    UPDATABLE_FIELDS,
    ImageAsset,
    ImageUpload,
    ListingDraft,
    ListingFilters,
    ListingPatch,
    ListingStatus,
    SellerSummary,
    storage_path_from_public_url,
)

__all__ = [
    "AssetUploadFailedError",
    "ImageAsset",
    "ImageUpload",
    "InvalidStatusTransitionError",
    "Listing",
    "ListingCreationFailedError",
    "ListingDeleteFailedError",
    "ListingDraft",
    "ListingFilters",
    "ListingNotFoundError",
    "ListingPatch",
    "ListingRepository",
    "ListingStatus",
    "ListingUpdateConflictError",
    "ListingUpdateFailedError",
    "SellerSummary",
    "UPDATABLE_FIELDS",
    "storage_path_from_public_url",
]
