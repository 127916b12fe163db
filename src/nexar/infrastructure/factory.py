"""Wiring of gateway adapters, repositories and services into one client."""

from __future__ import annotations

import logging
from typing import Callable, Optional

import httpx

from nexar.application.commands import (
    DeleteListingCommand,
    MarkMessageReadCommand,
    SendMessageCommand,
    SetUserSuspensionCommand,
    UpdateListingStatusCommand,
    UpdateProfileCommand,
    UploadAvatarCommand,
)
from nexar.application.ports import RemoteGateway, SessionStorePort
from nexar.application.queries import (
    AdminOverviewQuery,
    BrowseListingsQuery,
    ConnectionCheckQuery,
    GetListingQuery,
    GetProfileQuery,
    ListAllListingsQuery,
    ListAllUsersQuery,
    ListConversationsQuery,
)
from nexar.application.services import (
    AdminPrivilegeResolver,
    IdentityProfileSynchronizer,
    ImageAssetService,
    ListingLifecycleManager,
)
from nexar.domain.listing import ListingRepository, ListingStatus
from nexar.domain.messaging import MessageRepository
from nexar.domain.profile import ProfileRepository
from nexar.infrastructure.persistence.remote import (
    ListingRepositoryRemote,
    MessageRepositoryRemote,
    ProfileRepositoryRemote,
)
from nexar.infrastructure.remote import (
    RemoteAuthAdapter,
    RemoteBlobStoreAdapter,
    RemoteHttpClient,
    RemoteRowStoreAdapter,
)
from nexar.infrastructure.session import (
    JsonFileStorage,
    LocalSessionStore,
    LocalStorage,
)
from nexar_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class MarketplaceClient:
    """
    One client process: gateway, repositories, services and operations.

    Use as an async context manager so the HTTP connection pool is closed::

        async with build_client() as client:
            result = await client.synchronizer.sign_in(email, password)
    """

    def __init__(
        self,
        gateway: RemoteGateway,
        session_store: SessionStorePort,
        settings: Settings,
        http: Optional[RemoteHttpClient] = None,
    ):
        self._gateway = gateway
        self._session_store = session_store
        self._settings = settings
        self._http = http
        self._reset_listeners: list[Callable[[], None]] = []

        self.profile_repository: ProfileRepository = ProfileRepositoryRemote(gateway.rows)
        self.listing_repository: ListingRepository = ListingRepositoryRemote(gateway.rows)
        self.message_repository: MessageRepository = MessageRepositoryRemote(gateway.rows)

        self.listing_images = ImageAssetService(
            gateway.blobs,
            bucket=settings.listing_images_bucket,
            cache_control=settings.upload_cache_control,
        )
        self.avatar_images = ImageAssetService(
            gateway.blobs,
            bucket=settings.profile_images_bucket,
            cache_control=settings.upload_cache_control,
        )

        self.synchronizer = IdentityProfileSynchronizer(
            auth=gateway.auth,
            profile_repository=self.profile_repository,
            session_store=session_store,
            bootstrap_admin_email=settings.bootstrap_admin_email,
            password_reset_redirect_url=settings.password_reset_redirect_url,
            on_reset=self._notify_reset,
        )
        self.privileges = AdminPrivilegeResolver(
            synchronizer=self.synchronizer,
            bootstrap_admin_email=settings.bootstrap_admin_email,
        )
        self.listings = ListingLifecycleManager(
            synchronizer=self.synchronizer,
            listing_repository=self.listing_repository,
            images=self.listing_images,
            initial_status=ListingStatus(settings.listing_initial_status),
        )

    @property
    def gateway(self) -> RemoteGateway:
        return self._gateway

    @property
    def session_store(self) -> SessionStorePort:
        return self._session_store

    @property
    def settings(self) -> Settings:
        return self._settings

    # -------------------------------------------------------------------------
    # Reset hook
    # -------------------------------------------------------------------------

    def add_reset_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback run after sign-out to drop stale user state."""
        self._reset_listeners.append(listener)

    def _notify_reset(self) -> None:
        logger.debug("Client reset requested (%d listeners)", len(self._reset_listeners))
        for listener in self._reset_listeners:
            listener()

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def update_profile_command(self) -> UpdateProfileCommand:
        return UpdateProfileCommand(self.profile_repository)

    def upload_avatar_command(self) -> UploadAvatarCommand:
        return UploadAvatarCommand(self.profile_repository, self.avatar_images)

    def send_message_command(self) -> SendMessageCommand:
        return SendMessageCommand(
            self.synchronizer,
            self.message_repository,
            self.listing_repository,
        )

    def mark_message_read_command(self) -> MarkMessageReadCommand:
        return MarkMessageReadCommand(self.message_repository)

    def update_listing_status_command(self) -> UpdateListingStatusCommand:
        return UpdateListingStatusCommand(self.privileges, self.listings)

    def delete_listing_command(self) -> DeleteListingCommand:
        return DeleteListingCommand(self.privileges, self.listings)

    def set_user_suspension_command(self) -> SetUserSuspensionCommand:
        return SetUserSuspensionCommand(self.privileges, self.profile_repository)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def browse_listings_query(self) -> BrowseListingsQuery:
        return BrowseListingsQuery(self.listing_repository)

    def get_listing_query(self) -> GetListingQuery:
        return GetListingQuery(self.listing_repository)

    def get_profile_query(self) -> GetProfileQuery:
        return GetProfileQuery(self.profile_repository)

    def list_conversations_query(self) -> ListConversationsQuery:
        return ListConversationsQuery(self.synchronizer, self.message_repository)

    def list_all_listings_query(self) -> ListAllListingsQuery:
        return ListAllListingsQuery(self.privileges, self.listing_repository)

    def list_all_users_query(self) -> ListAllUsersQuery:
        return ListAllUsersQuery(self.privileges, self.profile_repository)

    def admin_overview_query(self) -> AdminOverviewQuery:
        return AdminOverviewQuery(
            self.privileges,
            self.listing_repository,
            self.profile_repository,
        )

    def connection_check_query(self) -> ConnectionCheckQuery:
        return ConnectionCheckQuery(
            self._gateway.rows,
            self._gateway.blobs,
            required_buckets=[
                self._settings.listing_images_bucket,
                self._settings.profile_images_bucket,
            ],
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()

    async def __aenter__(self) -> MarketplaceClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def build_client(
    settings: Optional[Settings] = None,
    storage: Optional[LocalStorage] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> MarketplaceClient:
    """Build a client talking to the configured hosted service.

    Local state (session cache entry and auth session) goes to ``storage``,
    by default the JSON file named by ``Settings.session_file``.
    """
    settings = settings or get_settings()
    storage = storage or JsonFileStorage(settings.session_file)

    http = RemoteHttpClient(
        base_url=settings.remote_url,
        api_key=settings.remote_anon_key.get_secret_value(),
        timeout=settings.remote_timeout,
        transport=transport,
    )
    gateway = RemoteGateway(
        auth=RemoteAuthAdapter(http, storage),
        rows=RemoteRowStoreAdapter(http),
        blobs=RemoteBlobStoreAdapter(http),
    )
    return MarketplaceClient(
        gateway=gateway,
        session_store=LocalSessionStore(storage),
        settings=settings,
        http=http,
    )
