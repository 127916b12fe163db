import logging
from uuid import UUID

from nexar.domain.listing import Listing, ListingNotFoundError, ListingRepository
from nexar.domain.shared.exceptions import DomainException

logger = logging.getLogger(__name__)


class GetListingQuery:
    """Query for a single listing; counts the view unless told not to."""

    def __init__(self, listing_repository: ListingRepository):
        self._listing_repo = listing_repository

    async def execute(self, listing_id: UUID, count_view: bool = True) -> Listing:
        listing = await self._listing_repo.find_by_id(listing_id)
        if listing is None:
            raise ListingNotFoundError(listing_id)

        if not count_view:
            return listing

        # Read-modify-write; concurrent views may be lost
        try:
            updated = await self._listing_repo.update(
                listing_id,
                {"views_count": listing.views_count + 1},
            )
        except DomainException as e:
            logger.warning("Could not count view for listing %s: %s", listing_id, e)
            return listing
        return updated or listing
