"""Identity-profile synchronization for sign-up, sign-in, sign-out and repair."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from nexar.application.dtos import (
    ActionReport,
    OperationResult,
    SessionCacheEntry,
    SignInOutcome,
    SignUpOutcome,
)
from nexar.application.ports import AuthPort, SessionStorePort
from nexar.domain.identity import Identity, NotAuthenticatedError
from nexar.domain.profile import (
    Profile,
    ProfileCreationFailedError,
    ProfileHints,
    ProfileRepository,
)
from nexar.domain.shared.exceptions import (
    DomainException,
    RemoteAuthError,
    RemoteConflictError,
    RemoteError,
    RemoteRequestError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _SessionResolution:
    entry: SessionCacheEntry
    profile: Profile | None
    degraded: bool


_SessionStrategy = Callable[[Identity], Awaitable[OperationResult[_SessionResolution]]]


class IdentityProfileSynchronizer:
    """
    Keeps every authenticated identity paired with exactly one profile.

    The hosted service creates identities (auth) and stores profiles (rows)
    independently, with no transaction spanning both. This service creates
    missing profiles on demand, keeps the local session cache in step with
    the profile, and degrades gracefully when the profile layer fails:
    account creation and authentication are never undone by a profile error.
    """

    def __init__(
        self,
        auth: AuthPort,
        profile_repository: ProfileRepository,
        session_store: SessionStorePort,
        bootstrap_admin_email: str,
        password_reset_redirect_url: str,
        on_reset: Callable[[], None] | None = None,
    ):
        self._auth = auth
        self._profile_repo = profile_repository
        self._session_store = session_store
        self._bootstrap_admin_email = bootstrap_admin_email
        self._password_reset_redirect_url = password_reset_redirect_url
        self._on_reset = on_reset
        self._session_strategies: Sequence[_SessionStrategy] = (
            self._session_from_profile,
            self._session_from_identity,
        )

    # -------------------------------------------------------------------------
    # Identity / profile lookup
    # -------------------------------------------------------------------------

    async def current_identity(self) -> Identity | None:
        """The signed-in identity, or None.

        An expired or revoked auth session clears the session cache so the
        UI stops showing a user the service no longer recognizes.
        """
        try:
            return await self._auth.get_user()
        except RemoteAuthError as e:
            logger.warning("Auth session rejected, clearing session cache: %s", e)
            self._session_store.clear()
            return None

    async def is_authenticated(self) -> bool:
        try:
            return await self.current_identity() is not None
        except RemoteError as e:
            logger.warning("Could not check authentication: %s", e)
            return False

    async def find_profile(self, identity: Identity) -> Profile | None:
        """Look up the identity's profile without creating one."""
        return await self._profile_repo.find_by_user_id(identity.id)

    async def ensure_profile(
        self,
        identity: Identity,
        hints: ProfileHints | None = None,
    ) -> Profile:
        """Return the identity's profile, creating it if it does not exist.

        An existing profile is returned unchanged. Lookup failures propagate
        as-is; insert failures raise ``ProfileCreationFailedError``.
        """
        existing = await self._profile_repo.find_by_user_id(identity.id)
        if existing is not None:
            logger.debug("Profile already exists for %s", identity.email)
            return existing

        profile = Profile.for_identity(
            identity,
            bootstrap_admin_email=self._bootstrap_admin_email,
            hints=hints,
        )
        logger.info("Creating profile for %s", identity.email)

        try:
            created = await self._profile_repo.insert(profile)
        except RemoteConflictError as e:
            # Another client created it between our lookup and insert
            winner = await self._profile_repo.find_by_user_id(identity.id)
            if winner is not None:
                return winner
            raise ProfileCreationFailedError(identity.id, str(e)) from e
        except RemoteError as e:
            raise ProfileCreationFailedError(identity.id, str(e)) from e

        logger.info("Profile %s created for %s", created.id, identity.email)
        return created

    # -------------------------------------------------------------------------
    # Sign-up / sign-in / sign-out
    # -------------------------------------------------------------------------

    async def sign_up(
        self,
        email: str,
        password: str,
        hints: ProfileHints | None = None,
    ) -> OperationResult[SignUpOutcome]:
        hints = hints or ProfileHints()
        try:
            result = await self._auth.sign_up(email, password, hints.to_metadata())
        except DomainException as e:
            logger.warning("Sign-up failed for %s: %s", email, e)
            return OperationResult.failure(e)

        if result.identity is None:
            return OperationResult.failure(
                RemoteRequestError("Sign-up did not return an account")
            )

        try:
            profile = await self.ensure_profile(result.identity, hints)
        except DomainException as e:
            logger.warning("Profile creation deferred for %s: %s", email, e)
            return OperationResult.success(
                SignUpOutcome(
                    identity=result.identity,
                    session=result.session,
                    profile_error=e,
                )
            )

        logger.info("Account created: %s", email)
        return OperationResult.success(
            SignUpOutcome(
                identity=result.identity,
                session=result.session,
                profile=profile,
            )
        )

    async def sign_in(self, email: str, password: str) -> OperationResult[SignInOutcome]:
        await self._invalidate_existing_session()

        try:
            result = await self._auth.sign_in_with_password(email, password)
        except DomainException as e:
            logger.warning("Sign-in failed for %s: %s", email, e)
            return OperationResult.failure(e)

        if result.identity is None:
            return OperationResult.failure(NotAuthenticatedError("sign in"))

        resolution = await self._resolve_session(result.identity)
        self._session_store.set(resolution.entry)

        logger.info(
            "Signed in: %s%s",
            email,
            " (degraded session)" if resolution.degraded else "",
        )
        return OperationResult.success(
            SignInOutcome(
                identity=result.identity,
                session_entry=resolution.entry,
                session=result.session,
                profile=resolution.profile,
                degraded=resolution.degraded,
            )
        )

    async def sign_out(self) -> OperationResult[None]:
        """Sign out; local state is cleared whatever the remote call does."""
        self._session_store.clear()

        error: DomainException | None = None
        try:
            await self._auth.sign_out()
        except DomainException as e:
            logger.warning("Remote sign-out failed, clearing local state anyway: %s", e)
            error = e
        finally:
            self._auth.clear_local_session()
            self._session_store.clear_all()
            self._request_client_reset()

        if error is not None:
            return OperationResult.failure(error)
        logger.info("Signed out")
        return OperationResult.success()

    # -------------------------------------------------------------------------
    # Repair
    # -------------------------------------------------------------------------

    async def repair(self) -> ActionReport:
        """Re-sync the session cache, creating the profile if it is missing."""
        try:
            identity = await self.current_identity()
        except DomainException as e:
            logger.error("Repair could not resolve the current identity: %s", e)
            return ActionReport.failed(f"Could not resolve current user: {e}")

        if identity is None:
            return ActionReport.failed("No authenticated user")

        try:
            existing = await self.find_profile(identity)
            if existing is not None:
                self._write_session(identity, existing)
                return ActionReport.succeeded("Profile found and session cache updated")

            profile = await self.ensure_profile(identity)
        except ProfileCreationFailedError as e:
            logger.error("Repair failed to create profile for %s: %s", identity.email, e)
            return ActionReport.failed("Failed to create profile")
        except DomainException as e:
            logger.error("Repair failed for %s: %s", identity.email, e)
            return ActionReport.failed(str(e))

        self._write_session(identity, profile)
        logger.info("Profile repaired for %s", identity.email)
        return ActionReport.succeeded("Profile created and session cache updated")

    # -------------------------------------------------------------------------
    # Password / email pass-through
    # -------------------------------------------------------------------------

    async def reset_password(self, email: str) -> OperationResult[None]:
        try:
            await self._auth.reset_password_for_email(
                email,
                redirect_to=self._password_reset_redirect_url,
            )
        except DomainException as e:
            logger.warning("Password reset email failed for %s: %s", email, e)
            return OperationResult.failure(e)
        logger.info("Password reset email sent to %s", email)
        return OperationResult.success()

    async def update_password(self, new_password: str) -> OperationResult[Identity]:
        try:
            identity = await self._auth.update_user(password=new_password)
        except DomainException as e:
            logger.warning("Password update failed: %s", e)
            return OperationResult.failure(e)
        logger.info("Password updated for %s", identity.email)
        return OperationResult.success(identity)

    async def update_email(self, new_email: str) -> OperationResult[Identity]:
        try:
            identity = await self._auth.update_user(email=new_email)
        except DomainException as e:
            logger.warning("Email update failed: %s", e)
            return OperationResult.failure(e)
        logger.info("Email update requested: %s", new_email)
        return OperationResult.success(identity)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _invalidate_existing_session(self) -> None:
        self._session_store.clear()
        try:
            await self._auth.sign_out()
        except DomainException as e:
            logger.warning("Could not invalidate previous session: %s", e)
        finally:
            self._auth.clear_local_session()

    async def _resolve_session(self, identity: Identity) -> _SessionResolution:
        for strategy in self._session_strategies:
            result = await strategy(identity)
            if result.ok and result.data is not None:
                return result.data
            logger.warning(
                "Session strategy %s failed for %s: %s",
                strategy.__name__,
                identity.email,
                result.error,
            )
        msg = "No session strategy produced a cache entry"
        raise RuntimeError(msg)

    async def _session_from_profile(
        self,
        identity: Identity,
    ) -> OperationResult[_SessionResolution]:
        try:
            profile = await self.ensure_profile(identity)
        except DomainException as e:
            return OperationResult.failure(e)
        entry = SessionCacheEntry.from_profile(
            identity, profile, self._bootstrap_admin_email
        )
        return OperationResult.success(
            _SessionResolution(entry=entry, profile=profile, degraded=False)
        )

    async def _session_from_identity(
        self,
        identity: Identity,
    ) -> OperationResult[_SessionResolution]:
        entry = SessionCacheEntry.from_identity(identity, self._bootstrap_admin_email)
        return OperationResult.success(
            _SessionResolution(entry=entry, profile=None, degraded=True)
        )

    def _write_session(self, identity: Identity, profile: Profile) -> None:
        self._session_store.set(
            SessionCacheEntry.from_profile(
                identity, profile, self._bootstrap_admin_email
            )
        )

    def _request_client_reset(self) -> None:
        if self._on_reset is not None:
            self._on_reset()
