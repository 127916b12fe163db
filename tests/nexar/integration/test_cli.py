"""
Integration tests for the nexar CLI.

Commands run through Typer's CliRunner with settings from the environment,
the session persisted to a temporary file and the hosted service replaced by
respx routes.
"""

import json
import logging
import time

import pytest
import respx
from httpx import Response
from rich.console import Console
from typer.testing import CliRunner

from nexar.infrastructure.remote.auth_adapter import AUTH_SESSION_KEY
from nexar.infrastructure.session import JsonFileStorage
from nexar.presentation.cli import app as cli_app
from tests.shared.fixtures import TestIdentityFactory, TestListingFactory, TestProfileFactory
from tests.shared.fixtures.factories import REMOTE_URL
from tests.shared.fixtures.remote_service import ADMIN_USER, FakeRemoteService

pytestmark = pytest.mark.integration

runner = CliRunner()

PENDING_LISTING_ROW = {
    "id": str(TestListingFactory.LISTING_ID),
    "seller_id": str(TestProfileFactory.BOB_PROFILE_ID),
    "seller_name": "Bob Motors",
    "seller_type": "dealer",
    "title": "Dacia Logan",
    "price": 4500,
    "year": 2015,
    "mileage": 120000,
    "location": "Iasi",
    "category": "autoturisme",
    "brand": "Dacia",
    "model": "Logan",
    "images": [],
    "image_paths": [],
    "status": "pending",
    "views_count": 0,
    "created_at": "2024-03-01T12:00:00+00:00",
    "updated_at": "2024-03-01T12:00:00+00:00",
}


@pytest.fixture
def session_file(monkeypatch, tmp_path):
    """Point the CLI at the mocked service and a throwaway session file."""
    path = tmp_path / "session.json"
    monkeypatch.setenv("REMOTE_URL", REMOTE_URL)
    monkeypatch.setenv("REMOTE_ANON_KEY", "anon-key")
    monkeypatch.setenv("SESSION_FILE", str(path))
    monkeypatch.setattr(cli_app, "console", Console(width=200))

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    cli_app._configure_logging.cache_clear()
    yield path
    cli_app._configure_logging.cache_clear()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def router():
    with respx.mock(assert_all_called=False) as respx_mock:
        yield respx_mock


def _store_auth_session(path) -> None:
    JsonFileStorage(path).set_item(
        AUTH_SESSION_KEY,
        json.dumps(
            {
                "access_token": "jwt-token",
                "refresh_token": "refresh",
                "expires_at": int(time.time()) + 3600,
            }
        ),
    )


def _sign_in(email: str = TestIdentityFactory.ALICE_EMAIL):
    return runner.invoke(cli_app.app, ["auth", "sign-in", email, "--password", "secret123"])


class TestAuthCommands:
    def test_sign_in(self, session_file, router):
        service = FakeRemoteService(router)

        result = _sign_in()

        assert result.exit_code == 0, result.output
        assert "Signed in as Alice Popescu <alice@example.com>" in result.output
        assert len(service.profiles) == 1
        assert "user" in json.loads(session_file.read_text())

    def test_rejected_credentials_exit_with_error(self, session_file, router):
        service = FakeRemoteService(router)
        service.token.mock(
            return_value=Response(
                400,
                json={"error": "invalid_grant", "error_description": "Invalid login credentials"},
            )
        )

        result = _sign_in()

        assert result.exit_code == 1
        assert "Invalid login credentials" in result.output
        assert service.profiles == []

    def test_missing_configuration(self, session_file, monkeypatch):
        monkeypatch.delenv("REMOTE_URL")

        result = runner.invoke(cli_app.app, ["auth", "whoami"])

        assert result.exit_code == 2
        assert "Configuration error" in result.output


class TestListingCommands:
    def test_create_with_images(self, session_file, router, tmp_path):
        service = FakeRemoteService(router)
        service.fail_upload_numbers = {2}
        front = tmp_path / "front.jpg"
        back = tmp_path / "back.png"
        front.write_bytes(b"front-image")
        back.write_bytes(b"back-image")
        assert _sign_in().exit_code == 0

        result = runner.invoke(
            cli_app.app,
            [
                "listings", "create",
                "--title", "VW Golf",
                "--price", "8900",
                "--year", "2016",
                "--mileage", "150000",
                "--location", "Cluj",
                "--category", "Autoturisme",
                "--brand", "Volkswagen",
                "--model", "Golf",
                "--image", str(front),
                "--image", str(back),
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Listing created:" in result.output
        assert "1 image(s) could not be uploaded" in result.output
        assert len(service.uploads) == 2
        assert service.listings[0]["price"] == 8900
        assert len(service.listings[0]["images"]) == 1

    def test_create_rejects_non_finite_price(self, session_file, router):
        service = FakeRemoteService(router)

        result = runner.invoke(
            cli_app.app,
            [
                "listings", "create",
                "--title", "VW Golf",
                "--price", "nan",
                "--year", "2016",
                "--mileage", "150000",
                "--location", "Cluj",
                "--category", "Autoturisme",
                "--brand", "Volkswagen",
                "--model", "Golf",
            ],
        )

        assert result.exit_code == 1
        assert "Invalid listing" in result.output
        assert service.listings == []

    def test_missing_listing_maps_to_exit_code(self, session_file, router):
        FakeRemoteService(router)

        result = runner.invoke(
            cli_app.app, ["listings", "show", str(TestListingFactory.LISTING_ID)]
        )

        assert result.exit_code == 1
        assert "LISTING_NOT_FOUND" in result.output


class TestAdminCommands:
    def test_set_status_approves_listing(self, session_file, router):
        service = FakeRemoteService(router, user=ADMIN_USER)
        service.listings.append(dict(PENDING_LISTING_ROW))
        _store_auth_session(session_file)

        result = runner.invoke(
            cli_app.app,
            ["admin", "set-status", str(TestListingFactory.LISTING_ID), "active"],
        )

        assert result.exit_code == 0, result.output
        assert f"Listing {TestListingFactory.LISTING_ID} is now active" in result.output
        assert service.listings[0]["status"] == "active"

    def test_set_status_requires_admin(self, session_file, router):
        service = FakeRemoteService(router)
        service.listings.append(dict(PENDING_LISTING_ROW))
        _store_auth_session(session_file)

        result = runner.invoke(
            cli_app.app,
            ["admin", "set-status", str(TestListingFactory.LISTING_ID), "active"],
        )

        assert result.exit_code == 1
        assert "ADMIN_REQUIRED" in result.output
        assert service.listings[0]["status"] == "pending"
