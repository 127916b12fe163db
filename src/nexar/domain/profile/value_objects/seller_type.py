from enum import Enum


class SellerType(str, Enum):
    """Whether a profile sells privately or as a registered dealer."""

    INDIVIDUAL = "individual"
    DEALER = "dealer"
