from nexar.domain.listing.aggregates.listing import Listing

__all__ = ["Listing"]
