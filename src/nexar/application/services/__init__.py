from nexar.application.services.admin_privilege_resolver import AdminPrivilegeResolver
from nexar.application.services.identity_profile_synchronizer import (
    IdentityProfileSynchronizer,
)
from nexar.application.services.image_asset_service import ImageAssetService
from nexar.application.services.listing_lifecycle_manager import (
    ListingLifecycleManager,
)

__all__ = [
    "AdminPrivilegeResolver",
    "IdentityProfileSynchronizer",
    "ImageAssetService",
    "ListingLifecycleManager",
]
