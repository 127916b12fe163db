"""Profile repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional
from uuid import UUID

from nexar.domain.profile.aggregates import Profile


class ProfileRepository(ABC):
    """Repository interface for Profile aggregates."""

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> Optional[Profile]:
        """
        Find the profile belonging to an identity.

        Parameters
        ----------
        user_id
            The identity's id (``Profile.user_id``)

        Returns
        -------
        Profile if found, None if the identity has no profile

        Raises
        ------
        RemoteError
            If the lookup itself failed (never raised for "not found")
        MalformedRowError
            If the stored row cannot be mapped to a Profile
        """

    @abstractmethod
    async def find_by_id(self, profile_id: UUID) -> Optional[Profile]:
        """Find a profile by its surrogate key."""

    @abstractmethod
    async def insert(self, profile: Profile) -> Profile:
        """
        Insert a new profile and return the stored row.

        Raises
        ------
        RemoteConflictError
            If a profile for the same ``user_id`` already exists
        RemoteError
            For any other insert failure
        """

    @abstractmethod
    async def update(
        self,
        user_id: UUID,
        values: Mapping[str, Any],
    ) -> Optional[Profile]:
        """
        Apply a partial update to the profile of ``user_id``.

        Returns the updated profile, or None when no row matched.
        """

    @abstractmethod
    async def list_all(self) -> list[Profile]:
        """All profiles, newest first."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored profiles."""
