from typing import Optional

from nexar.domain.listing import Listing, ListingFilters, ListingRepository, ListingStatus


class BrowseListingsQuery:
    """Query for publicly visible listings, newest first."""

    def __init__(self, listing_repository: ListingRepository):
        self._listing_repo = listing_repository

    async def execute(self, filters: Optional[ListingFilters] = None) -> list[Listing]:
        return await self._listing_repo.browse(
            filters or ListingFilters(),
            status=ListingStatus.ACTIVE,
        )
