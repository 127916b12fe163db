"""Tests for RemoteAuthAdapter against a mocked auth API."""

import json
import time

import pytest
import respx
from httpx import Response

from nexar.domain.shared.exceptions import (
    MalformedRowError,
    RemoteAuthError,
    RemoteUnavailableError,
)
from nexar.infrastructure.remote import RemoteAuthAdapter
from nexar.infrastructure.remote.auth_adapter import AUTH_SESSION_KEY
from nexar.infrastructure.session import MemoryStorage
from tests.shared.fixtures import TestIdentityFactory

USER = {
    "id": str(TestIdentityFactory.BOB_ID),
    "email": TestIdentityFactory.BOB_EMAIL,
    "user_metadata": {"name": "Bob", "sellerType": "dealer"},
}


def _session_body(access_token: str = "jwt-1", **extra) -> dict:
    return {
        "access_token": access_token,
        "refresh_token": "refresh-1",
        "expires_in": 3600,
        "user": USER,
        **extra,
    }


class TestSignUp:
    async def test_returns_session_when_confirmation_disabled(
        self, mock_api: respx.MockRouter, http
    ):
        route = mock_api.post("/auth/v1/signup").mock(
            return_value=Response(200, json=_session_body())
        )
        auth = RemoteAuthAdapter(http)

        result = await auth.sign_up("bob@example.com", "secret123", {"name": "Bob"})

        assert result.identity.id == TestIdentityFactory.BOB_ID
        assert result.session.access_token == "jwt-1"
        assert http.access_token == "jwt-1"
        sent = json.loads(route.calls[0].request.content)
        assert sent == {
            "email": "bob@example.com",
            "password": "secret123",
            "data": {"name": "Bob"},
        }

    async def test_pending_confirmation_has_no_session(
        self, mock_api: respx.MockRouter, http
    ):
        mock_api.post("/auth/v1/signup").mock(return_value=Response(200, json=USER))
        auth = RemoteAuthAdapter(http)

        result = await auth.sign_up("bob@example.com", "secret123")

        assert result.identity.email == TestIdentityFactory.BOB_EMAIL
        assert result.identity.metadata["sellerType"] == "dealer"
        assert result.session is None
        assert auth.session is None


class TestSignIn:
    async def test_persists_session(self, mock_api: respx.MockRouter, http):
        route = mock_api.post("/auth/v1/token").mock(
            return_value=Response(200, json=_session_body())
        )
        storage = MemoryStorage()
        auth = RemoteAuthAdapter(http, storage)

        result = await auth.sign_in_with_password("bob@example.com", "secret123")

        assert result.identity.id == TestIdentityFactory.BOB_ID
        assert route.calls[0].request.url.params["grant_type"] == "password"
        stored = json.loads(storage.get_item(AUTH_SESSION_KEY))
        assert stored["access_token"] == "jwt-1"
        assert stored["expires_at"] > time.time()

    async def test_invalid_credentials(self, mock_api: respx.MockRouter, http):
        mock_api.post("/auth/v1/token").mock(
            return_value=Response(
                400,
                json={"error": "invalid_grant", "error_description": "Invalid login credentials"},
            )
        )
        auth = RemoteAuthAdapter(http)

        with pytest.raises(RemoteAuthError, match="Invalid login credentials"):
            await auth.sign_in_with_password("bob@example.com", "wrong")

    async def test_session_restored_from_storage(self, mock_api: respx.MockRouter, http):
        mock_api.post("/auth/v1/token").mock(return_value=Response(200, json=_session_body()))
        storage = MemoryStorage()
        await RemoteAuthAdapter(http, storage).sign_in_with_password("b@x.io", "pw")
        http.access_token = None

        restored = RemoteAuthAdapter(http, storage)

        assert restored.session.access_token == "jwt-1"
        assert http.access_token == "jwt-1"

    async def test_unreadable_stored_session_is_dropped(self, http):
        storage = MemoryStorage()
        storage.set_item(AUTH_SESSION_KEY, "{not json")

        auth = RemoteAuthAdapter(http, storage)

        assert auth.session is None
        assert storage.get_item(AUTH_SESSION_KEY) is None

    async def test_stored_session_of_wrong_shape_is_dropped(self, http):
        storage = MemoryStorage()
        storage.set_item(AUTH_SESSION_KEY, '["jwt-1"]')

        auth = RemoteAuthAdapter(http, storage)

        assert auth.session is None
        assert storage.get_item(AUTH_SESSION_KEY) is None

    async def test_non_json_body(self, mock_api: respx.MockRouter, http):
        mock_api.post("/auth/v1/token").mock(
            return_value=Response(200, text="<html>gateway</html>")
        )
        auth = RemoteAuthAdapter(http)

        with pytest.raises(MalformedRowError):
            await auth.sign_in_with_password("bob@example.com", "secret123")
        assert auth.session is None


class TestGetUser:
    async def test_array_body_is_malformed(self, mock_api: respx.MockRouter, http):
        mock_api.post("/auth/v1/token").mock(return_value=Response(200, json=_session_body()))
        mock_api.get("/auth/v1/user").mock(return_value=Response(200, json=[USER]))
        auth = RemoteAuthAdapter(http)
        await auth.sign_in_with_password("bob@example.com", "secret123")

        with pytest.raises(MalformedRowError):
            await auth.get_user()

    async def test_no_session_means_no_user(self, mock_api: respx.MockRouter, http):
        route = mock_api.get("/auth/v1/user")
        auth = RemoteAuthAdapter(http)

        assert await auth.get_user() is None
        assert not route.called

    async def test_returns_identity(self, mock_api: respx.MockRouter, http):
        mock_api.post("/auth/v1/token").mock(return_value=Response(200, json=_session_body()))
        route = mock_api.get("/auth/v1/user").mock(return_value=Response(200, json=USER))
        auth = RemoteAuthAdapter(http)
        await auth.sign_in_with_password("bob@example.com", "secret123")

        identity = await auth.get_user()

        assert identity.id == TestIdentityFactory.BOB_ID
        assert route.calls[0].request.headers["authorization"] == "Bearer jwt-1"

    async def test_rejected_session_is_cleared(self, mock_api: respx.MockRouter, http):
        mock_api.post("/auth/v1/token").mock(return_value=Response(200, json=_session_body()))
        mock_api.get("/auth/v1/user").mock(
            return_value=Response(401, json={"msg": "JWT expired"})
        )
        storage = MemoryStorage()
        auth = RemoteAuthAdapter(http, storage)
        await auth.sign_in_with_password("bob@example.com", "secret123")

        with pytest.raises(RemoteAuthError):
            await auth.get_user()

        assert auth.session is None
        assert http.access_token is None
        assert storage.get_item(AUTH_SESSION_KEY) is None

    async def test_expired_token_is_refreshed(self, mock_api: respx.MockRouter, http):
        storage = MemoryStorage()
        storage.set_item(
            AUTH_SESSION_KEY,
            json.dumps(
                {"access_token": "old", "refresh_token": "r-1", "expires_at": int(time.time()) - 5}
            ),
        )
        refresh = mock_api.post("/auth/v1/token").mock(
            return_value=Response(200, json=_session_body("fresh"))
        )
        user = mock_api.get("/auth/v1/user").mock(return_value=Response(200, json=USER))
        auth = RemoteAuthAdapter(http, storage)

        await auth.get_user()

        assert refresh.calls[0].request.url.params["grant_type"] == "refresh_token"
        assert json.loads(refresh.calls[0].request.content) == {"refresh_token": "r-1"}
        assert user.calls[0].request.headers["authorization"] == "Bearer fresh"


class TestSignOut:
    async def test_without_session_is_a_no_op(self, mock_api: respx.MockRouter, http):
        route = mock_api.post("/auth/v1/logout")

        await RemoteAuthAdapter(http).sign_out()

        assert not route.called

    async def test_local_session_cleared_even_on_failure(
        self, mock_api: respx.MockRouter, http
    ):
        mock_api.post("/auth/v1/token").mock(return_value=Response(200, json=_session_body()))
        mock_api.post("/auth/v1/logout").mock(return_value=Response(500))
        storage = MemoryStorage()
        auth = RemoteAuthAdapter(http, storage)
        await auth.sign_in_with_password("bob@example.com", "secret123")

        with pytest.raises(RemoteUnavailableError):
            await auth.sign_out()

        assert auth.session is None
        assert storage.get_item(AUTH_SESSION_KEY) is None


class TestAccountUpdates:
    async def test_reset_password_sends_redirect(self, mock_api: respx.MockRouter, http):
        route = mock_api.post("/auth/v1/recover").mock(return_value=Response(200, json={}))

        await RemoteAuthAdapter(http).reset_password_for_email(
            "bob@example.com", redirect_to="http://localhost:5173/auth/reset-password"
        )

        request = route.calls[0].request
        assert request.url.params["redirect_to"] == "http://localhost:5173/auth/reset-password"
        assert json.loads(request.content) == {"email": "bob@example.com"}

    async def test_update_requires_session(self, http):
        with pytest.raises(RemoteAuthError):
            await RemoteAuthAdapter(http).update_user(password="new-secret")

    async def test_update_password(self, mock_api: respx.MockRouter, http):
        mock_api.post("/auth/v1/token").mock(return_value=Response(200, json=_session_body()))
        route = mock_api.put("/auth/v1/user").mock(return_value=Response(200, json=USER))
        auth = RemoteAuthAdapter(http)
        await auth.sign_in_with_password("bob@example.com", "secret123")

        identity = await auth.update_user(password="new-secret")

        assert identity.id == TestIdentityFactory.BOB_ID
        assert json.loads(route.calls[0].request.content) == {"password": "new-secret"}
