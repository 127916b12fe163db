"""Admin privilege resolution with a bootstrap fast path and degraded fallback."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence

from nexar.application.dtos import OperationResult
from nexar.application.services.identity_profile_synchronizer import (
    IdentityProfileSynchronizer,
)
from nexar.domain.identity import AdminRequiredError, Identity, NotAuthenticatedError
from nexar.domain.profile import ProfileRequiredError
from nexar.domain.shared.exceptions import DomainException

logger = logging.getLogger(__name__)

_AdminStrategy = Callable[[Identity], Awaitable[OperationResult[bool]]]


class AdminPrivilegeResolver:
    """
    Decides whether an identity has administrative rights.

    Strategies are tried in order and the first success wins:

    1. bootstrap email: succeeds only when the email matches, so the
       bootstrap administrator is recognized before any profile exists
    2. profile flag: ``Profile.is_admin``; fails on lookup errors, missing
       profiles and malformed rows
    3. email fallback: the bootstrap comparison again, always succeeds

    While the profile layer is degraded only the bootstrap administrator is
    recognized.
    """

    def __init__(
        self,
        synchronizer: IdentityProfileSynchronizer,
        bootstrap_admin_email: str,
    ):
        self._synchronizer = synchronizer
        self._bootstrap_admin_email = bootstrap_admin_email
        self._strategies: Sequence[_AdminStrategy] = (
            self._from_bootstrap_email,
            self._from_profile_flag,
            self._from_email_fallback,
        )

    async def is_admin(self, identity: Identity | None) -> bool:
        """Never raises; every failure path resolves to a boolean."""
        if identity is None:
            return False

        for strategy in self._strategies:
            result = await strategy(identity)
            if result.ok:
                return bool(result.data)
            logger.debug(
                "Admin strategy %s skipped for %s: %s",
                strategy.__name__,
                identity.email,
                result.error,
            )
        return False

    async def is_current_user_admin(self) -> bool:
        try:
            identity = await self._synchronizer.current_identity()
        except DomainException as e:
            logger.warning("Could not resolve current identity for admin check: %s", e)
            return False
        return await self.is_admin(identity)

    async def require_admin(self) -> Identity:
        """Return the current identity or raise if it is not an administrator.

        Raises
        ------
        NotAuthenticatedError
            If nobody is signed in
        AdminRequiredError
            If the signed-in identity is not an administrator
        """
        identity = await self._synchronizer.current_identity()
        if identity is None:
            raise NotAuthenticatedError("perform administrative actions")
        if not await self.is_admin(identity):
            raise AdminRequiredError(identity.email)
        return identity

    async def _from_bootstrap_email(self, identity: Identity) -> OperationResult[bool]:
        if identity.has_email(self._bootstrap_admin_email):
            return OperationResult.success(True)
        return OperationResult.failure(AdminRequiredError(identity.email))

    async def _from_profile_flag(self, identity: Identity) -> OperationResult[bool]:
        try:
            profile = await self._synchronizer.find_profile(identity)
        except DomainException as e:
            logger.warning("Profile lookup failed during admin check: %s", e)
            return OperationResult.failure(e)
        if profile is None:
            return OperationResult.failure(ProfileRequiredError(identity.id))
        return OperationResult.success(bool(profile.is_admin))

    async def _from_email_fallback(self, identity: Identity) -> OperationResult[bool]:
        return OperationResult.success(identity.has_email(self._bootstrap_admin_email))
