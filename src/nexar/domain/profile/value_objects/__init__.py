from nexar.domain.profile.value_objects.profile_hints import ProfileHints
from nexar.domain.profile.value_objects.seller_type import SellerType

__all__ = [
    "ProfileHints",
    "SellerType",
]
