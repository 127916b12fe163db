"""Headline numbers for the administration dashboard."""

from dataclasses import dataclass, field
from datetime import timedelta

from nexar.application.services import AdminPrivilegeResolver
from nexar.domain.listing import ListingRepository, ListingStatus
from nexar.domain.profile import ProfileRepository
from nexar.domain.shared.time import ensure_tz_aware, utc_now

NEW_LISTING_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class AdminOverview:
    listings_by_status: dict[ListingStatus, int] = field(default_factory=dict)
    total_users: int = 0
    dealers: int = 0
    suspended_users: int = 0
    new_listings: int = 0

    @property
    def total_listings(self) -> int:
        return sum(self.listings_by_status.values())

    @property
    def active_listings(self) -> int:
        return self.listings_by_status.get(ListingStatus.ACTIVE, 0)

    @property
    def pending_listings(self) -> int:
        return self.listings_by_status.get(ListingStatus.PENDING, 0)


class AdminOverviewQuery:
    """Query for listing and user totals."""

    def __init__(
        self,
        privilege_resolver: AdminPrivilegeResolver,
        listing_repository: ListingRepository,
        profile_repository: ProfileRepository,
    ):
        self._privileges = privilege_resolver
        self._listing_repo = listing_repository
        self._profile_repo = profile_repository

    async def execute(self) -> AdminOverview:
        await self._privileges.require_admin()

        listings = [listing for listing, _ in await self._listing_repo.list_all_with_sellers()]
        profiles = await self._profile_repo.list_all()

        by_status = {status: 0 for status in ListingStatus}
        for listing in listings:
            by_status[listing.status] += 1

        cutoff = utc_now() - NEW_LISTING_WINDOW
        new_listings = sum(
            1 for listing in listings if ensure_tz_aware(listing.created_at) >= cutoff
        )

        return AdminOverview(
            listings_by_status=by_status,
            total_users=len(profiles),
            dealers=sum(1 for p in profiles if p.is_dealer),
            suspended_users=sum(1 for p in profiles if p.suspended),
            new_listings=new_listings,
        )
