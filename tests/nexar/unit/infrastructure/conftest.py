"""Fixtures for gateway adapter tests against a mocked hosted service."""

import pytest
import respx

from nexar.infrastructure.remote import RemoteHttpClient
from tests.shared.fixtures.factories import REMOTE_URL

ANON_KEY = "anon-key"


@pytest.fixture
def mock_api() -> respx.MockRouter:
    """Context manager for mocking hosted service responses."""
    with respx.mock(base_url=REMOTE_URL, assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
async def http():
    client = RemoteHttpClient(base_url=REMOTE_URL, api_key=ANON_KEY, timeout=5.0)
    yield client
    await client.aclose()
