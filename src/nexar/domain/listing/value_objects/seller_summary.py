from dataclasses import dataclass

from nexar.domain.profile.value_objects import SellerType


@dataclass(frozen=True)
class SellerSummary:
    """Live seller data joined onto a listing for moderation views."""

    name: str
    email: str | None
    seller_type: SellerType
    verified: bool
