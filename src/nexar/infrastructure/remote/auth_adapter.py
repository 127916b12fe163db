"""Auth port over the hosted service's authentication API (GoTrue)."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Mapping
from uuid import UUID

from nexar.application.ports import AuthPort, AuthResult, AuthSession
from nexar.domain.identity import Identity
from nexar.domain.shared.exceptions import MalformedRowError, RemoteAuthError
from nexar.infrastructure.remote.http import RemoteHttpClient, json_object
from nexar.infrastructure.session import LocalStorage

logger = logging.getLogger(__name__)

AUTH_PATH = "/auth/v1"
AUTH_SESSION_KEY = "auth_session"

# Refresh slightly early so a token does not expire mid-request
_EXPIRY_MARGIN_SECONDS = 30


class RemoteAuthAdapter(AuthPort):
    """
    Password authentication with a locally persisted session.

    The access token of the current session is handed to the shared HTTP
    client so row and blob requests run as the signed-in user.
    """

    def __init__(self, http: RemoteHttpClient, storage: LocalStorage | None = None):
        self._http = http
        self._storage = storage
        self._session: AuthSession | None = None
        self._restore_session()

    @property
    def session(self) -> AuthSession | None:
        return self._session

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Mapping[str, Any] | None = None,
    ) -> AuthResult:
        response = await self._http.request(
            "POST",
            f"{AUTH_PATH}/signup",
            json={"email": email, "password": password, "data": dict(metadata or {})},
        )
        body = json_object(response, "auth response")

        # With email confirmation enabled the user comes back without a session
        if "access_token" in body:
            session = _session_from_body(body)
            self._set_session(session)
            return AuthResult(identity=_identity_from_user(body.get("user")), session=session)

        user = body.get("user") if "user" in body else body
        return AuthResult(identity=_identity_from_user(user), session=None)

    async def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        response = await self._http.request(
            "POST",
            f"{AUTH_PATH}/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        body = json_object(response, "auth response")
        session = _session_from_body(body)
        self._set_session(session)
        return AuthResult(identity=_identity_from_user(body.get("user")), session=session)

    async def sign_out(self) -> None:
        if self._session is None:
            return
        try:
            await self._http.request("POST", f"{AUTH_PATH}/logout")
        finally:
            self.clear_local_session()

    async def get_user(self) -> Identity | None:
        if self._session is None:
            return None

        await self._refresh_if_expired()
        try:
            response = await self._http.request("GET", f"{AUTH_PATH}/user")
        except RemoteAuthError:
            self.clear_local_session()
            raise
        return _identity_from_user(json_object(response, "auth user"))

    async def reset_password_for_email(self, email: str, redirect_to: str) -> None:
        await self._http.request(
            "POST",
            f"{AUTH_PATH}/recover",
            params={"redirect_to": redirect_to},
            json={"email": email},
        )

    async def update_user(
        self,
        *,
        password: str | None = None,
        email: str | None = None,
    ) -> Identity:
        if self._session is None:
            msg = "No active session"
            raise RemoteAuthError(msg)

        payload: dict[str, str] = {}
        if password is not None:
            payload["password"] = password
        if email is not None:
            payload["email"] = email

        response = await self._http.request("PUT", f"{AUTH_PATH}/user", json=payload)
        identity = _identity_from_user(json_object(response, "auth user"))
        if identity is None:
            raise MalformedRowError("auth user", "missing id")
        return identity

    def clear_local_session(self) -> None:
        self._session = None
        self._http.access_token = None
        if self._storage is not None:
            self._storage.remove_item(AUTH_SESSION_KEY)

    # -------------------------------------------------------------------------
    # Session handling
    # -------------------------------------------------------------------------

    async def _refresh_if_expired(self) -> None:
        session = self._session
        if session is None or session.expires_at is None or not session.refresh_token:
            return
        if session.expires_at - _EXPIRY_MARGIN_SECONDS > time.time():
            return

        logger.debug("Access token expired, refreshing")
        try:
            response = await self._http.request(
                "POST",
                f"{AUTH_PATH}/token",
                params={"grant_type": "refresh_token"},
                json={"refresh_token": session.refresh_token},
            )
        except RemoteAuthError:
            self.clear_local_session()
            raise
        self._set_session(_session_from_body(json_object(response, "auth session")))

    def _set_session(self, session: AuthSession) -> None:
        self._session = session
        self._http.access_token = session.access_token
        if self._storage is not None:
            self._storage.set_item(
                AUTH_SESSION_KEY,
                json.dumps(
                    {
                        "access_token": session.access_token,
                        "refresh_token": session.refresh_token,
                        "expires_at": session.expires_at,
                    }
                ),
            )

    def _restore_session(self) -> None:
        if self._storage is None:
            return
        raw = self._storage.get_item(AUTH_SESSION_KEY)
        if raw is None:
            return
        try:
            self._session = _session_from_body(json.loads(raw))
        except (ValueError, MalformedRowError) as e:
            logger.warning("Discarding unreadable stored auth session: %s", e)
            self._storage.remove_item(AUTH_SESSION_KEY)
            return
        self._http.access_token = self._session.access_token


def _session_from_body(body: Any) -> AuthSession:
    if not isinstance(body, Mapping):
        raise MalformedRowError("auth session", "expected an object")
    token = body.get("access_token")
    if not token:
        raise MalformedRowError("auth session", "missing access_token")

    expires_at = body.get("expires_at")
    if expires_at is None and body.get("expires_in") is not None:
        expires_at = int(time.time()) + int(body["expires_in"])

    return AuthSession(
        access_token=str(token),
        refresh_token=body.get("refresh_token"),
        expires_at=int(expires_at) if expires_at is not None else None,
    )


def _identity_from_user(user: Any) -> Identity | None:
    if not isinstance(user, Mapping) or not user.get("id"):
        return None
    try:
        user_id = UUID(str(user["id"]))
    except ValueError as e:
        raise MalformedRowError("auth user", f"invalid id {user['id']!r}") from e
    return Identity(
        id=user_id,
        email=user.get("email") or None,
        metadata=dict(user.get("user_metadata") or {}),
    )
