from nexar.application.queries.listing.browse_listings_query import (
    BrowseListingsQuery,
)
from nexar.application.queries.listing.get_listing_query import GetListingQuery

__all__ = [
    "BrowseListingsQuery",
    "GetListingQuery",
]
