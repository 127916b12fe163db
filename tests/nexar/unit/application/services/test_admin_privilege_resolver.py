"""Unit tests for AdminPrivilegeResolver."""

import pytest
from httpx import Response

from nexar.application.services import AdminPrivilegeResolver
from nexar.domain.identity import AdminRequiredError, Identity, NotAuthenticatedError
from nexar.domain.shared.exceptions import RemoteUnavailableError
from tests.shared.fixtures import (
    BOOTSTRAP_ADMIN_EMAIL,
    TestIdentityFactory,
    TestProfileFactory,
)


class TestIsAdmin:
    """Tests for the ordered privilege strategies."""

    @pytest.mark.asyncio
    async def test_none_is_never_admin(self, privileges):
        assert await privileges.is_admin(None) is False

    @pytest.mark.asyncio
    async def test_bootstrap_email_without_profile(self, privileges, profiles):
        """The bootstrap administrator is recognized before any profile exists."""
        assert await privileges.is_admin(TestIdentityFactory.bootstrap_admin()) is True
        assert profiles.lookup_calls == 0

    @pytest.mark.asyncio
    async def test_bootstrap_email_is_case_insensitive(self, privileges):
        identity = Identity(id=TestIdentityFactory.ADMIN_ID, email="ADMIN@nexar.ro")

        assert await privileges.is_admin(identity) is True

    @pytest.mark.asyncio
    async def test_bootstrap_email_survives_profile_failure(self, privileges, profiles):
        profiles.fail_lookup = True

        assert await privileges.is_admin(TestIdentityFactory.bootstrap_admin()) is True

    @pytest.mark.asyncio
    async def test_profile_flag_grants_admin(self, privileges, profiles):
        profiles.rows[TestIdentityFactory.BOB_ID] = TestProfileFactory.bob(is_admin=True)

        assert await privileges.is_admin(TestIdentityFactory.bob()) is True

    @pytest.mark.asyncio
    async def test_profile_without_flag(self, privileges, profiles):
        profiles.rows[TestIdentityFactory.BOB_ID] = TestProfileFactory.bob()

        assert await privileges.is_admin(TestIdentityFactory.bob()) is False

    @pytest.mark.asyncio
    async def test_missing_profile_is_not_admin(self, privileges):
        assert await privileges.is_admin(TestIdentityFactory.alice()) is False

    @pytest.mark.asyncio
    async def test_profile_failure_falls_back_to_email(self, privileges, profiles):
        """While the profile layer is degraded only the bootstrap admin passes."""
        profiles.rows[TestIdentityFactory.BOB_ID] = TestProfileFactory.bob(is_admin=True)
        profiles.fail_lookup = True

        assert await privileges.is_admin(TestIdentityFactory.bob()) is False


class TestRequireAdmin:
    """Tests for the guard used by administrative operations."""

    @pytest.mark.asyncio
    async def test_requires_authentication(self, privileges):
        with pytest.raises(NotAuthenticatedError):
            await privileges.require_admin()

    @pytest.mark.asyncio
    async def test_rejects_regular_user(self, privileges, auth):
        auth.current = TestIdentityFactory.alice()

        with pytest.raises(AdminRequiredError):
            await privileges.require_admin()

    @pytest.mark.asyncio
    async def test_returns_admin_identity(self, privileges, auth):
        auth.current = TestIdentityFactory.bootstrap_admin()

        identity = await privileges.require_admin()

        assert identity.email == BOOTSTRAP_ADMIN_EMAIL

    @pytest.mark.asyncio
    async def test_current_user_check_swallows_remote_errors(self, privileges, auth):
        auth.current = TestIdentityFactory.alice()
        auth.fail_get_user = RemoteUnavailableError("offline")

        with pytest.raises(RemoteUnavailableError):
            await privileges.require_admin()
        assert await privileges.is_current_user_admin() is False


UNREADABLE_PROFILE_BODIES = [
    pytest.param({"text": "<html>gateway</html>"}, id="html"),
    pytest.param({"json": {"message": "oops"}}, id="object-instead-of-array"),
]


class TestUnreadableProfileResponses:
    """The profile lookup answers 200 with a body that is not a row list."""

    @pytest.fixture
    def remote_privileges(self, remote_synchronizer) -> AdminPrivilegeResolver:
        return AdminPrivilegeResolver(remote_synchronizer, BOOTSTRAP_ADMIN_EMAIL)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", UNREADABLE_PROFILE_BODIES)
    async def test_falls_back_to_email_check(self, remote_privileges, profiles_api, body):
        route = profiles_api.get("/rest/v1/profiles").mock(return_value=Response(200, **body))

        assert await remote_privileges.is_admin(TestIdentityFactory.bob()) is False
        assert route.called

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", UNREADABLE_PROFILE_BODIES)
    async def test_current_user_check(self, remote_privileges, profiles_api, auth, body):
        profiles_api.get("/rest/v1/profiles").mock(return_value=Response(200, **body))
        auth.current = TestIdentityFactory.bob()

        assert await remote_privileges.is_current_user_admin() is False
