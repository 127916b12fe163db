"""Row store implementation of ListingRepository."""

import logging
from datetime import datetime
from typing import Any, Mapping, Optional
from uuid import UUID

from nexar.application.ports import Filter, OrderBy, RowStorePort
from nexar.domain.listing import (
    Listing,
    ListingFilters,
    ListingRepository,
    ListingStatus,
    SellerSummary,
)
from nexar.domain.profile import SellerType
from nexar.domain.shared.exceptions import MalformedRowError
from nexar.infrastructure.persistence.remote._mapping import (
    as_decimal,
    as_int,
    as_timestamp,
    as_uuid,
    required,
)

logger = logging.getLogger(__name__)

LISTINGS = "listings"

# Embedded seller join used by the moderation view
SELLER_EMBED = "profiles!listings_seller_id_fkey(name,email,seller_type,verified)"


class ListingRepositoryRemote(ListingRepository):
    """Listings stored in the hosted service's ``listings`` collection."""

    def __init__(self, rows: RowStorePort) -> None:
        self._rows = rows

    async def find_by_id(self, listing_id: UUID) -> Optional[Listing]:
        row = await self._rows.select_one(LISTINGS, filters=[Filter.eq("id", listing_id)])
        if row is None:
            return None
        return self._map_to_domain(row)

    async def insert(self, listing: Listing) -> Listing:
        row = await self._rows.insert(LISTINGS, self._map_to_row(listing))
        return self._map_to_domain(row)

    async def update(
        self,
        listing_id: UUID,
        values: Mapping[str, Any],
        expected_updated_at: datetime | None = None,
    ) -> Optional[Listing]:
        filters = [Filter.eq("id", listing_id)]
        if expected_updated_at is not None:
            filters.append(Filter.eq("updated_at", expected_updated_at))

        rows = await self._rows.update(LISTINGS, values, filters=filters)
        if not rows:
            return None
        return self._map_to_domain(rows[0])

    async def delete(self, listing_id: UUID) -> None:
        await self._rows.delete(LISTINGS, filters=[Filter.eq("id", listing_id)])
        logger.debug("Deleted listing row %s", listing_id)

    async def browse(
        self,
        filters: ListingFilters,
        status: ListingStatus = ListingStatus.ACTIVE,
    ) -> list[Listing]:
        rows = await self._rows.select(
            LISTINGS,
            filters=[Filter.eq("status", status), *_browse_filters(filters)],
            order_by=OrderBy("created_at", descending=True),
        )
        return [self._map_to_domain(row) for row in rows]

    async def list_all_with_sellers(
        self,
    ) -> list[tuple[Listing, Optional[SellerSummary]]]:
        rows = await self._rows.select(
            LISTINGS,
            columns=f"*,{SELLER_EMBED}",
            order_by=OrderBy("created_at", descending=True),
        )
        return [(self._map_to_domain(row), _seller_summary(row.get("profiles"))) for row in rows]

    def _map_to_row(self, listing: Listing) -> dict[str, Any]:
        return {
            "id": listing.id,
            "seller_id": listing.seller_id,
            "seller_name": listing.seller_name,
            "seller_type": listing.seller_type,
            "title": listing.title,
            "price": listing.price,
            "year": listing.year,
            "mileage": listing.mileage,
            "location": listing.location,
            "category": listing.category,
            "brand": listing.brand,
            "model": listing.model,
            "engine_capacity": listing.engine_capacity,
            "fuel_type": listing.fuel_type,
            "transmission": listing.transmission,
            "condition": listing.condition,
            "description": listing.description,
            "images": listing.images,
            "image_paths": listing.image_paths,
            "status": listing.status,
            "views_count": listing.views_count,
            "favorites_count": listing.favorites_count,
            "featured": listing.featured,
            "created_at": listing.created_at,
            "updated_at": listing.updated_at,
        }

    def _map_to_domain(self, row: Mapping[str, Any]) -> Listing:
        try:
            status = ListingStatus(row.get("status") or ListingStatus.ACTIVE.value)
            seller_type = SellerType(row.get("seller_type") or SellerType.INDIVIDUAL.value)
        except ValueError as e:
            raise MalformedRowError(LISTINGS, str(e)) from e

        return Listing(
            id=as_uuid(required(row, "id", LISTINGS), LISTINGS, "id"),
            seller_id=as_uuid(required(row, "seller_id", LISTINGS), LISTINGS, "seller_id"),
            seller_name=row.get("seller_name") or "",
            seller_type=seller_type,
            title=row.get("title") or "",
            price=as_decimal(row.get("price") or 0, LISTINGS, "price"),
            year=as_int(row.get("year"), LISTINGS, "year"),
            mileage=as_int(row.get("mileage"), LISTINGS, "mileage"),
            location=row.get("location") or "",
            category=row.get("category") or "",
            brand=row.get("brand") or "",
            model=row.get("model") or "",
            engine_capacity=row.get("engine_capacity"),
            fuel_type=row.get("fuel_type"),
            transmission=row.get("transmission"),
            condition=row.get("condition"),
            description=row.get("description") or "",
            images=list(row.get("images") or []),
            image_paths=list(row.get("image_paths") or []),
            status=status,
            views_count=as_int(row.get("views_count"), LISTINGS, "views_count"),
            favorites_count=as_int(row.get("favorites_count"), LISTINGS, "favorites_count"),
            featured=bool(row.get("featured")),
            created_at=as_timestamp(row.get("created_at"), LISTINGS, "created_at"),
            updated_at=as_timestamp(row.get("updated_at"), LISTINGS, "updated_at"),
        )


def _browse_filters(filters: ListingFilters) -> list[Filter]:  # NOQA: C901
    result: list[Filter] = []
    if filters.category:
        result.append(Filter.eq("category", filters.category.lower()))
    if filters.brand:
        result.append(Filter.eq("brand", filters.brand))
    if filters.price_min is not None:
        result.append(Filter.gte("price", filters.price_min))
    if filters.price_max is not None:
        result.append(Filter.lte("price", filters.price_max))
    if filters.year_min is not None:
        result.append(Filter.gte("year", filters.year_min))
    if filters.year_max is not None:
        result.append(Filter.lte("year", filters.year_max))
    if filters.engine_min is not None:
        result.append(Filter.gte("engine_capacity", filters.engine_min))
    if filters.engine_max is not None:
        result.append(Filter.lte("engine_capacity", filters.engine_max))
    if filters.mileage_max is not None:
        result.append(Filter.lte("mileage", filters.mileage_max))
    if filters.location:
        result.append(Filter.contains_text("location", filters.location))
    if filters.seller_type is not None:
        result.append(Filter.eq("seller_type", filters.seller_type))
    if filters.condition:
        result.append(Filter.eq("condition", filters.condition))
    if filters.fuel_type:
        result.append(Filter.eq("fuel_type", filters.fuel_type))
    if filters.transmission:
        result.append(Filter.eq("transmission", filters.transmission))
    return result


def _seller_summary(embedded: Any) -> Optional[SellerSummary]:
    if isinstance(embedded, list):
        embedded = embedded[0] if embedded else None
    if not isinstance(embedded, Mapping):
        return None
    try:
        seller_type = SellerType(embedded.get("seller_type") or SellerType.INDIVIDUAL.value)
    except ValueError:
        seller_type = SellerType.INDIVIDUAL
    return SellerSummary(
        name=embedded.get("name") or "",
        email=embedded.get("email"),
        seller_type=seller_type,
        verified=bool(embedded.get("verified")),
    )
