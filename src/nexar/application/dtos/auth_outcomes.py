"""Payloads of successful sign-up and sign-in operations."""

from __future__ import annotations

from dataclasses import dataclass

from nexar.application.dtos.session_entry import SessionCacheEntry
from nexar.application.ports.gateway import AuthSession
from nexar.domain.identity import Identity
from nexar.domain.profile import Profile
from nexar.domain.shared.exceptions import DomainException


@dataclass(frozen=True)
class SignUpOutcome:
    """The account exists; ``profile_error`` reports a deferred profile.

    A profile failure never undoes the sign-up. The profile is created later
    by sign-in or the repair path.
    """

    identity: Identity
    session: AuthSession | None = None
    profile: Profile | None = None
    profile_error: DomainException | None = None

    @property
    def profile_synced(self) -> bool:
        return self.profile is not None


@dataclass(frozen=True)
class SignInOutcome:
    """The identity is signed in and the session cache is populated.

    ``degraded`` is True when the cache entry was built from identity data
    alone because the profile could not be ensured.
    """

    identity: Identity
    session_entry: SessionCacheEntry
    session: AuthSession | None = None
    profile: Profile | None = None
    degraded: bool = False
