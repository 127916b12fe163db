"""Search filters for browsing listings."""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal

from nexar.domain.profile.value_objects import SellerType


@dataclass(frozen=True)
class ListingFilters:
    """Optional criteria; unset fields do not narrow the result."""

    category: str | None = None
    brand: str | None = None
    price_min: Decimal | None = None
    price_max: Decimal | None = None
    year_min: int | None = None
    year_max: int | None = None
    location: str | None = None
    seller_type: SellerType | None = None
    condition: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    engine_min: int | None = None
    engine_max: int | None = None
    mileage_max: int | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) in (None, "") for f in fields(self))
