from nexar.domain.listing.repositories.listing_repository import ListingRepository

__all__ = ["ListingRepository"]
