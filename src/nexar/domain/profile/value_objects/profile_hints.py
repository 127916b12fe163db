"""Caller-supplied defaults for a profile that is about to be created."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from nexar.domain.profile.value_objects.seller_type import SellerType
from nexar.domain.shared.exceptions import ValidationError


@dataclass(frozen=True)
class ProfileHints:
    """Optional values that win over identity metadata and derived defaults.

    Precedence when a profile is built: hint > identity metadata > default.
    A hint that is ``None`` or an empty string counts as absent.
    """

    name: str | None = None
    phone: str | None = None
    location: str | None = None
    seller_type: SellerType | None = None

    def __post_init__(self) -> None:
        if isinstance(self.seller_type, str) and not isinstance(
            self.seller_type, SellerType
        ):
            try:
                object.__setattr__(self, "seller_type", SellerType(self.seller_type))
            except ValueError as e:
                msg = f"Unknown seller type: {self.seller_type}"
                raise ValidationError(msg) from e

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> ProfileHints:
        """Build hints from the sign-up form payload (camelCase or snake_case)."""
        if not data:
            return cls()
        return cls(
            name=data.get("name") or None,
            phone=data.get("phone") or None,
            location=data.get("location") or None,
            seller_type=data.get("sellerType") or data.get("seller_type") or None,
        )

    def to_metadata(self) -> dict[str, str]:
        """Metadata sent to the auth subsystem at sign-up."""
        metadata: dict[str, str] = {}
        if self.name:
            metadata["name"] = self.name
        if self.phone:
            metadata["phone"] = self.phone
        if self.location:
            metadata["location"] = self.location
        if self.seller_type:
            metadata["sellerType"] = self.seller_type.value
        return metadata
