from nexar.application.queries.admin.admin_overview_query import (
    AdminOverview,
    AdminOverviewQuery,
)
from nexar.application.queries.admin.list_all_listings_query import (
    AdminListingItem,
    ListAllListingsQuery,
)
from nexar.application.queries.admin.list_all_users_query import ListAllUsersQuery

__all__ = [
    "AdminListingItem",
    "AdminOverview",
    "AdminOverviewQuery",
    "ListAllListingsQuery",
    "ListAllUsersQuery",
]
