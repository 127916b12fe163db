"""Shared HTTP client for the hosted service's REST endpoints."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from nexar.domain.shared.exceptions import (
    MalformedRowError,
    RemoteAuthError,
    RemoteConflictError,
    RemoteError,
    RemoteRequestError,
    RemoteUnavailableError,
)

logger = logging.getLogger(__name__)

# Auth error codes that mean "bad credentials or dead session"
_AUTH_ERROR_CODES = frozenset(
    {"invalid_grant", "invalid_credentials", "bad_jwt", "session_not_found"}
)


class RemoteHttpClient:
    """
    One lazily created ``httpx.AsyncClient`` shared by all gateway adapters.

    Every request carries the project key; the bearer token is the signed-in
    user's access token when there is one, the project key otherwise.
    Failures are raised as ``RemoteError`` subclasses.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self._access_token: str | None = None
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @access_token.setter
    def access_token(self, token: str | None) -> None:
        self._access_token = token

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers={"apikey": self._api_key},
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | list[tuple[str, Any]] | None = None,
        json: Any = None,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        client = await self._get_client()
        merged_headers = {
            "Authorization": f"Bearer {self._access_token or self._api_key}",
            **(headers or {}),
        }

        logger.debug("%s %s", method, path)
        try:
            response = await client.request(
                method,
                path,
                params=params,
                json=json,
                content=content,
                headers=merged_headers,
            )
        except httpx.TimeoutException as e:
            msg = f"Request timed out: {method} {path}"
            raise RemoteUnavailableError(msg) from e
        except httpx.TransportError as e:
            msg = f"Service unreachable: {e}"
            raise RemoteUnavailableError(msg) from e

        if response.is_error:
            raise error_from_response(response)
        return response


def json_body(response: httpx.Response, source: str) -> Any:
    """Decode a successful response, raising ``MalformedRowError`` if it is not JSON."""
    try:
        return response.json()
    except ValueError as e:
        raise MalformedRowError(source, "response body is not JSON") from e


def json_object(response: httpx.Response, source: str) -> dict[str, Any]:
    body = json_body(response, source)
    if not isinstance(body, dict):
        raise MalformedRowError(source, f"expected an object, got {type(body).__name__}")
    return body


def json_rows(response: httpx.Response, source: str) -> list[dict[str, Any]]:
    return ensure_rows(json_body(response, source), source)


def ensure_rows(body: Any, source: str) -> list[dict[str, Any]]:
    """Check that ``body`` is an array of row objects."""
    if not isinstance(body, list):
        raise MalformedRowError(source, f"expected an array, got {type(body).__name__}")
    for row in body:
        if not isinstance(row, dict):
            raise MalformedRowError(source, f"expected row objects, got {type(row).__name__}")
    return body


def error_from_response(response: httpx.Response) -> RemoteError:
    """Map an error response onto the remote error hierarchy."""
    status = response.status_code
    body = _json_body(response)
    message = _error_message(body) or response.reason_phrase or f"HTTP {status}"
    error_code = str(body.get("error_code") or body.get("error") or body.get("code") or "")

    if status >= 500:
        return RemoteUnavailableError(message, status_code=status)
    if status == 409:
        return RemoteConflictError(message, status_code=status, details=body)
    if status in (401, 403) or error_code in _AUTH_ERROR_CODES:
        return RemoteAuthError(message, status_code=status)
    return RemoteRequestError(message, status_code=status, details=body)


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_message(body: Mapping[str, Any]) -> str | None:
    for key in ("message", "msg", "error_description", "error"):
        value = body.get(key)
        if value:
            return str(value)
    return None
