"""
Pytest configuration for client library tests.

Services are wired against the in-memory fakes; every fixture is fresh per
test so failure flags never leak. The ``remote_*`` fixtures swap in the real
profile repository over a respx-mocked REST API instead.
"""

import pytest
import respx

from nexar.application.services import (
    AdminPrivilegeResolver,
    IdentityProfileSynchronizer,
    ImageAssetService,
    ListingLifecycleManager,
)
from nexar.infrastructure.persistence.remote import ProfileRepositoryRemote
from nexar.infrastructure.remote import RemoteHttpClient, RemoteRowStoreAdapter
from nexar.infrastructure.session import LocalSessionStore, MemoryStorage
from tests.shared.fixtures import (
    BOOTSTRAP_ADMIN_EMAIL,
    FakeAuth,
    FakeBlobStore,
    InMemoryListingRepository,
    InMemoryMessageRepository,
    InMemoryProfileRepository,
)
from tests.shared.fixtures.factories import REMOTE_URL

RESET_REDIRECT_URL = "http://localhost:5173/auth/reset-password"


@pytest.fixture
def auth() -> FakeAuth:
    return FakeAuth()


@pytest.fixture
def profiles() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def listings() -> InMemoryListingRepository:
    return InMemoryListingRepository()


@pytest.fixture
def messages() -> InMemoryMessageRepository:
    return InMemoryMessageRepository()


@pytest.fixture
def blobs() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def session_store() -> LocalSessionStore:
    return LocalSessionStore(MemoryStorage())


@pytest.fixture
def synchronizer(auth, profiles, session_store) -> IdentityProfileSynchronizer:
    return IdentityProfileSynchronizer(
        auth=auth,
        profile_repository=profiles,
        session_store=session_store,
        bootstrap_admin_email=BOOTSTRAP_ADMIN_EMAIL,
        password_reset_redirect_url=RESET_REDIRECT_URL,
    )


@pytest.fixture
def privileges(synchronizer) -> AdminPrivilegeResolver:
    return AdminPrivilegeResolver(synchronizer, BOOTSTRAP_ADMIN_EMAIL)


@pytest.fixture
def listing_images(blobs) -> ImageAssetService:
    return ImageAssetService(blobs, bucket="listing-images", cache_control="3600")


@pytest.fixture
def lifecycle(synchronizer, listings, listing_images) -> ListingLifecycleManager:
    return ListingLifecycleManager(synchronizer, listings, listing_images)


@pytest.fixture
def profiles_api() -> respx.MockRouter:
    """Mocked hosted service for services wired to the real profile repository."""
    with respx.mock(base_url=REMOTE_URL, assert_all_called=False) as router:
        yield router


@pytest.fixture
async def remote_profiles(profiles_api) -> ProfileRepositoryRemote:
    http = RemoteHttpClient(base_url=REMOTE_URL, api_key="anon-key", timeout=5.0)
    yield ProfileRepositoryRemote(RemoteRowStoreAdapter(http))
    await http.aclose()


@pytest.fixture
def remote_synchronizer(auth, remote_profiles, session_store) -> IdentityProfileSynchronizer:
    return IdentityProfileSynchronizer(
        auth=auth,
        profile_repository=remote_profiles,
        session_store=session_store,
        bootstrap_admin_email=BOOTSTRAP_ADMIN_EMAIL,
        password_reset_redirect_url=RESET_REDIRECT_URL,
    )
