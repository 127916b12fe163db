"""Moderation view of every listing, regardless of status."""

from dataclasses import dataclass
from typing import Optional

from nexar.application.services import AdminPrivilegeResolver
from nexar.domain.listing import (
    Listing,
    ListingRepository,
    ListingStatus,
    SellerSummary,
)


@dataclass(frozen=True)
class AdminListingItem:
    """A listing with the live data of its seller (None if the join failed)."""

    listing: Listing
    seller: Optional[SellerSummary]

    def matches(self, search: str) -> bool:
        needle = search.lower()
        haystack = [self.listing.title, self.listing.seller_name, str(self.listing.id)]
        return any(needle in (value or "").lower() for value in haystack)


class ListAllListingsQuery:
    """Query for all listings, newest first, optionally narrowed."""

    def __init__(
        self,
        privilege_resolver: AdminPrivilegeResolver,
        listing_repository: ListingRepository,
    ):
        self._privileges = privilege_resolver
        self._listing_repo = listing_repository

    async def execute(
        self,
        status: Optional[ListingStatus] = None,
        search: Optional[str] = None,
    ) -> list[AdminListingItem]:
        await self._privileges.require_admin()

        rows = await self._listing_repo.list_all_with_sellers()
        items = [AdminListingItem(listing=listing, seller=seller) for listing, seller in rows]

        if status is not None:
            items = [item for item in items if item.listing.status == status]
        if search:
            items = [item for item in items if item.matches(search)]
        return items
