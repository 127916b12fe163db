"""Listing repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Mapping, Optional
from uuid import UUID

from nexar.domain.listing.aggregates import Listing
from nexar.domain.listing.value_objects import (
    ListingFilters,
    ListingStatus,
    SellerSummary,
)


class ListingRepository(ABC):
    """Repository interface for Listing aggregates."""

    @abstractmethod
    async def find_by_id(self, listing_id: UUID) -> Optional[Listing]:
        """
        Find a listing by id.

        Returns
        -------
        Listing if found, None otherwise

        Raises
        ------
        RemoteError
            If the lookup itself failed
        """

    @abstractmethod
    async def insert(self, listing: Listing) -> Listing:
        """Insert a new listing and return the stored row."""

    @abstractmethod
    async def update(
        self,
        listing_id: UUID,
        values: Mapping[str, Any],
        expected_updated_at: datetime | None = None,
    ) -> Optional[Listing]:
        """
        Apply a partial update.

        When ``expected_updated_at`` is given the write only applies if the
        stored ``updated_at`` still equals it.

        Returns
        -------
        The updated listing, or None when no row matched
        """

    @abstractmethod
    async def delete(self, listing_id: UUID) -> None:
        """Delete the listing row (no-op when it does not exist)."""

    @abstractmethod
    async def browse(
        self,
        filters: ListingFilters,
        status: ListingStatus = ListingStatus.ACTIVE,
    ) -> list[Listing]:
        """Listings with ``status`` matching ``filters``, newest first."""

    @abstractmethod
    async def list_all_with_sellers(
        self,
    ) -> list[tuple[Listing, Optional[SellerSummary]]]:
        """Every listing regardless of status, joined with its seller."""
