"""Row store implementation of ProfileRepository."""

import logging
from typing import Any, Mapping, Optional
from uuid import UUID

from nexar.application.ports import Filter, OrderBy, RowStorePort
from nexar.domain.profile import Profile, ProfileRepository, SellerType
from nexar.domain.shared.exceptions import MalformedRowError
from nexar.infrastructure.persistence.remote._mapping import (
    as_timestamp,
    as_uuid,
    required,
)

logger = logging.getLogger(__name__)

PROFILES = "profiles"


class ProfileRepositoryRemote(ProfileRepository):
    """Profiles stored in the hosted service's ``profiles`` collection."""

    def __init__(self, rows: RowStorePort) -> None:
        self._rows = rows

    async def find_by_user_id(self, user_id: UUID) -> Optional[Profile]:
        row = await self._rows.select_one(PROFILES, filters=[Filter.eq("user_id", user_id)])
        if row is None:
            return None
        return self._map_to_domain(row)

    async def find_by_id(self, profile_id: UUID) -> Optional[Profile]:
        row = await self._rows.select_one(PROFILES, filters=[Filter.eq("id", profile_id)])
        if row is None:
            return None
        return self._map_to_domain(row)

    async def insert(self, profile: Profile) -> Profile:
        row = await self._rows.insert(PROFILES, self._map_to_row(profile))
        logger.debug("Inserted profile %s for user %s", profile.id, profile.user_id)
        return self._map_to_domain(row)

    async def update(
        self,
        user_id: UUID,
        values: Mapping[str, Any],
    ) -> Optional[Profile]:
        rows = await self._rows.update(
            PROFILES,
            values,
            filters=[Filter.eq("user_id", user_id)],
        )
        if not rows:
            return None
        return self._map_to_domain(rows[0])

    async def list_all(self) -> list[Profile]:
        rows = await self._rows.select(
            PROFILES,
            order_by=OrderBy("created_at", descending=True),
        )
        return [self._map_to_domain(row) for row in rows]

    async def count(self) -> int:
        return await self._rows.count(PROFILES)

    def _map_to_row(self, profile: Profile) -> dict[str, Any]:
        return {
            "id": profile.id,
            "user_id": profile.user_id,
            "name": profile.name,
            "email": profile.email,
            "phone": profile.phone,
            "location": profile.location,
            "avatar_url": profile.avatar_url,
            "seller_type": profile.seller_type,
            "verified": profile.verified,
            "is_admin": profile.is_admin,
            "suspended": profile.suspended,
            "created_at": profile.created_at,
        }

    def _map_to_domain(self, row: Mapping[str, Any]) -> Profile:
        try:
            seller_type = SellerType(row.get("seller_type") or SellerType.INDIVIDUAL.value)
        except ValueError as e:
            raise MalformedRowError(PROFILES, f"invalid seller_type: {row.get('seller_type')!r}") from e

        return Profile(
            id=as_uuid(required(row, "id", PROFILES), PROFILES, "id"),
            user_id=as_uuid(required(row, "user_id", PROFILES), PROFILES, "user_id"),
            name=row.get("name") or "",
            email=row.get("email"),
            seller_type=seller_type,
            phone=row.get("phone"),
            location=row.get("location"),
            avatar_url=row.get("avatar_url"),
            verified=bool(row.get("verified")),
            is_admin=bool(row.get("is_admin")),
            suspended=bool(row.get("suspended")),
            created_at=as_timestamp(row.get("created_at"), PROFILES, "created_at"),
        )
