"""Shared test fixtures and data factories."""

from tests.shared.fixtures.factories import (
    BOOTSTRAP_ADMIN_EMAIL,
    TestIdentityFactory,
    TestListingFactory,
    TestProfileFactory,
)
from tests.shared.fixtures.fakes import (
    FakeAuth,
    FakeBlobStore,
    InMemoryListingRepository,
    InMemoryMessageRepository,
    InMemoryProfileRepository,
)

__all__ = [
    "BOOTSTRAP_ADMIN_EMAIL",
    "FakeAuth",
    "FakeBlobStore",
    "InMemoryListingRepository",
    "InMemoryMessageRepository",
    "InMemoryProfileRepository",
    "TestIdentityFactory",
    "TestListingFactory",
    "TestProfileFactory",
]
