from nexar.domain.listing.value_objects.image_asset import (
    ImageAsset,
    ImageUpload,
    storage_path_from_public_url,
)
from nexar.domain.listing.value_objects.listing_draft import (
    UPDATABLE_FIELDS,
    ListingDraft,
    ListingPatch,
)
from nexar.domain.listing.value_objects.listing_filters import ListingFilters
from nexar.domain.listing.value_objects.listing_status import ListingStatus
from nexar.domain.listing.value_objects.seller_summary import SellerSummary

__all__ = [
    "ImageAsset",
    "ImageUpload",
    "ListingDraft",
    "ListingFilters",
    "ListingPatch",
    "ListingStatus",
    "SellerSummary",
    "UPDATABLE_FIELDS",
    "storage_path_from_public_url",
]
