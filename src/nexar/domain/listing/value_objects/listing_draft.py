"""Caller-supplied listing content for create and update operations."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Mapping

from nexar.domain.listing.value_objects.listing_status import ListingStatus
from nexar.domain.shared.exceptions import ValidationError
from nexar.domain.shared.time import utc_now

MIN_YEAR = 1900


def parse_price(value: Any) -> Decimal:
    """Convert a caller-supplied price to a finite, non-negative Decimal."""
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as e:
        msg = f"Listing price is not a number: {value!r}"
        raise ValidationError(msg) from e
    if not price.is_finite():
        msg = f"Listing price must be a finite number: {value!r}"
        raise ValidationError(msg)
    if price < 0:
        msg = f"Listing price cannot be negative: {price}"
        raise ValidationError(msg)
    return price


@dataclass(frozen=True)
class ListingDraft:
    """The seller-editable content of a new listing.

    Seller binding, identifiers, status and counters are set by the
    lifecycle manager, never by the caller.
    """

    title: str
    price: Decimal
    year: int
    mileage: int
    location: str
    category: str
    brand: str
    model: str
    engine_capacity: int | None = None
    fuel_type: str | None = None
    transmission: str | None = None
    condition: str | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            msg = "Listing title cannot be empty"
            raise ValidationError(msg)

        object.__setattr__(self, "price", parse_price(self.price))

        max_year = utc_now().year + 1
        if not MIN_YEAR <= self.year <= max_year:
            msg = f"Listing year must be between {MIN_YEAR} and {max_year}"
            raise ValidationError(msg)

        if self.mileage < 0:
            msg = "Listing mileage cannot be negative"
            raise ValidationError(msg)

        if self.engine_capacity is not None and self.engine_capacity < 0:
            msg = "Engine capacity cannot be negative"
            raise ValidationError(msg)

        object.__setattr__(self, "category", self.category.strip().lower())

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


DRAFT_FIELDS = frozenset(ListingDraft.__dataclass_fields__)
UPDATABLE_FIELDS = DRAFT_FIELDS | {"images", "status", "featured"}


@dataclass(frozen=True)
class ListingPatch:
    """A partial update: only the fields present are written."""

    values: Mapping[str, Any]

    def __post_init__(self) -> None:
        values = dict(self.values)

        unknown = set(values) - UPDATABLE_FIELDS
        if unknown:
            msg = f"Fields cannot be updated: {', '.join(sorted(unknown))}"
            raise ValidationError(msg, details={"fields": sorted(unknown)})

        if "status" in values and not isinstance(values["status"], ListingStatus):
            try:
                values["status"] = ListingStatus(values["status"])
            except ValueError as e:
                msg = f"Unknown listing status: {values['status']}"
                raise ValidationError(msg) from e

        if "images" in values:
            values["images"] = [str(url) for url in values["images"] or []]

        if "price" in values and values["price"] is not None:
            values["price"] = parse_price(values["price"])

        if "category" in values and values["category"]:
            values["category"] = str(values["category"]).strip().lower()

        object.__setattr__(self, "values", MappingProxyType(values))

    @classmethod
    def of(cls, **values: Any) -> ListingPatch:
        return cls(values=values)

    @property
    def images(self) -> list[str] | None:
        """Explicit image list set by the caller, if any."""
        if "images" not in self.values:
            return None
        return list(self.values["images"])

    @property
    def status(self) -> ListingStatus | None:
        return self.values.get("status")

    def is_empty(self) -> bool:
        return not self.values

    def to_dict(self) -> dict[str, Any]:
        return dict(self.values)
