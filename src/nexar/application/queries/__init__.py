"""Query layer. Read-only operations for retrieving data."""

from nexar.application.queries.admin import (
    AdminListingItem,
    AdminOverview,
    AdminOverviewQuery,
    ListAllListingsQuery,
    ListAllUsersQuery,
)
from nexar.application.queries.listing import BrowseListingsQuery, GetListingQuery
from nexar.application.queries.messaging import ListConversationsQuery
from nexar.application.queries.profile import GetProfileQuery
from nexar.application.queries.system import ConnectionCheckQuery

__all__ = [
    # Admin
    "AdminListingItem",
    "AdminOverview",
    "AdminOverviewQuery",
    "ListAllListingsQuery",
    "ListAllUsersQuery",
    # Listings
    "BrowseListingsQuery",
    "GetListingQuery",
    # Messaging
    "ListConversationsQuery",
    # Profile
    "GetProfileQuery",
    # System
    "ConnectionCheckQuery",
]
