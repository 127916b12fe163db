"""Listing aggregate - a marketplace item owned by a Profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Sequence
from uuid import UUID, uuid4

from nexar.domain.listing.value_objects import (
    ImageAsset,
    ListingDraft,
    ListingStatus,
    storage_path_from_public_url,
)
from nexar.domain.profile import Profile, SellerType
from nexar.domain.shared.time import utc_now


@dataclass
class Listing:
    """
    Listing aggregate root.

    ``seller_id`` is always a Profile.id. ``seller_name`` and ``seller_type``
    are a snapshot taken at creation, not a live reference to the profile.
    ``image_paths`` runs parallel to ``images`` for rows written by this
    client and is empty for older rows.
    """

    id: UUID
    seller_id: UUID
    seller_name: str
    seller_type: SellerType
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
    images: list[str] = field(default_factory=list)
    image_paths: list[str] = field(default_factory=list)
    status: ListingStatus = ListingStatus.ACTIVE
    views_count: int = 0
    favorites_count: int = 0
    featured: bool = False
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def create(
        cls,
        draft: ListingDraft,
        seller: Profile,
        images: Sequence[ImageAsset] = (),
        status: ListingStatus = ListingStatus.ACTIVE,
    ) -> Listing:
        """Bind a draft to its seller with a fresh id and zeroed counters."""
        now = utc_now()
        return cls(
            id=uuid4(),
            seller_id=seller.id,
            seller_name=seller.name,
            seller_type=seller.seller_type,
            images=[asset.url for asset in images],
            image_paths=[asset.path for asset in images],
            status=status,
            views_count=0,
            favorites_count=0,
            featured=False,
            created_at=now,
            updated_at=now,
            **draft.to_dict(),
        )

    def storage_paths(self) -> list[str]:
        """Storage paths of every referenced image.

        Uses persisted paths when they cover all images, otherwise derives
        them from the public URLs.
        """
        if self.image_paths and len(self.image_paths) == len(self.images):
            return list(self.image_paths)
        return [storage_path_from_public_url(url) for url in self.images]

    def __repr__(self) -> str:
        return (
            f"Listing(id={self.id}, seller_id={self.seller_id}, "
            f"title={self.title!r}, status={self.status.value})"
        )
