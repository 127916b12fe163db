from uuid import UUID

from nexar.application.services import AdminPrivilegeResolver, ListingLifecycleManager
from nexar.domain.listing import Listing, ListingPatch, ListingStatus


class UpdateListingStatusCommand:
    """Command for an administrator to moderate a listing's status."""

    def __init__(
        self,
        privilege_resolver: AdminPrivilegeResolver,
        lifecycle_manager: ListingLifecycleManager,
    ):
        self._privileges = privilege_resolver
        self._lifecycle = lifecycle_manager

    async def execute(self, listing_id: UUID, status: ListingStatus) -> Listing:
        await self._privileges.require_admin()
        result = await self._lifecycle.update(listing_id, ListingPatch.of(status=status))
        return result.unwrap()
