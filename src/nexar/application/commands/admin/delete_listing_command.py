from uuid import UUID

from nexar.application.services import AdminPrivilegeResolver, ListingLifecycleManager


class DeleteListingCommand:
    """Command for an administrator to remove any listing and its images."""

    def __init__(
        self,
        privilege_resolver: AdminPrivilegeResolver,
        lifecycle_manager: ListingLifecycleManager,
    ):
        self._privileges = privilege_resolver
        self._lifecycle = lifecycle_manager

    async def execute(self, listing_id: UUID) -> bool:
        await self._privileges.require_admin()
        result = await self._lifecycle.delete(listing_id)
        return bool(result.unwrap())
