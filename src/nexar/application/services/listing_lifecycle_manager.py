"""Listing create/update/delete including the multi-image workflow."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence
from uuid import UUID

from nexar.application.dtos import OperationResult
from nexar.application.services.identity_profile_synchronizer import (
    IdentityProfileSynchronizer,
)
from nexar.application.services.image_asset_service import ImageAssetService
from nexar.domain.identity import Identity, NotAuthenticatedError
from nexar.domain.listing import (
    ImageUpload,
    InvalidStatusTransitionError,
    Listing,
    ListingCreationFailedError,
    ListingDeleteFailedError,
    ListingDraft,
    ListingNotFoundError,
    ListingPatch,
    ListingRepository,
    ListingStatus,
    ListingUpdateConflictError,
    ListingUpdateFailedError,
    storage_path_from_public_url,
)
from nexar.domain.profile import ProfileRequiredError
from nexar.domain.shared.exceptions import (
    DomainException,
    RemoteError,
    ValidationError,
)
from nexar.domain.shared.time import utc_now

logger = logging.getLogger(__name__)


class ListingLifecycleManager:
    """
    Creates, updates and deletes listings.

    Owns the seller binding (``seller_id`` is the caller's Profile.id) and
    the image workflow: uploads are sequential and tolerant, removals are
    best-effort per object. Row failures are fatal to the operation; image
    failures never are.
    """

    def __init__(
        self,
        synchronizer: IdentityProfileSynchronizer,
        listing_repository: ListingRepository,
        images: ImageAssetService,
        initial_status: ListingStatus = ListingStatus.ACTIVE,
    ):
        self._synchronizer = synchronizer
        self._listing_repo = listing_repository
        self._images = images
        self._initial_status = initial_status

    async def create(
        self,
        draft: ListingDraft,
        images: Sequence[ImageUpload] = (),
    ) -> OperationResult[Listing]:
        try:
            listing = await self._create(draft, images)
        except DomainException as e:
            logger.warning("Listing creation failed: %s", e)
            return OperationResult.failure(e)
        return OperationResult.success(listing)

    async def update(
        self,
        listing_id: UUID,
        patch: ListingPatch,
        new_images: Sequence[ImageUpload] | None = None,
        expected_updated_at: datetime | None = None,
    ) -> OperationResult[Listing]:
        try:
            listing = await self._update(
                listing_id, patch, new_images or (), expected_updated_at
            )
        except DomainException as e:
            logger.warning("Listing %s update failed: %s", listing_id, e)
            return OperationResult.failure(e)
        return OperationResult.success(listing)

    async def delete(self, listing_id: UUID) -> OperationResult[bool]:
        """Delete a listing and its images.

        ``data`` is False when the listing did not exist (nothing to do).
        """
        try:
            deleted = await self._delete(listing_id)
        except DomainException as e:
            logger.warning("Listing %s deletion failed: %s", listing_id, e)
            return OperationResult.failure(e)
        return OperationResult.success(deleted)

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    async def _create(
        self,
        draft: ListingDraft,
        uploads: Sequence[ImageUpload],
    ) -> Listing:
        identity = await self._require_identity("create a listing")

        # Profile completion is a precondition here, never implicit
        profile = await self._synchronizer.find_profile(identity)
        if profile is None:
            raise ProfileRequiredError(identity.id)

        assets = await self._images.upload_all(profile.id, uploads)
        if len(assets) < len(uploads):
            logger.warning(
                "%d of %d images could not be uploaded",
                len(uploads) - len(assets),
                len(uploads),
            )

        listing = Listing.create(
            draft,
            seller=profile,
            images=assets,
            status=self._initial_status,
        )

        try:
            created = await self._listing_repo.insert(listing)
        except RemoteError as e:
            orphaned = [asset.path for asset in assets]
            if orphaned:
                logger.warning("Listing insert failed, orphaned images: %s", orphaned)
            raise ListingCreationFailedError(str(e), orphaned) from e

        logger.info(
            "Listing created: %s (seller=%s, images=%d, status=%s)",
            created.id,
            profile.id,
            len(created.images),
            created.status.value,
        )
        return created

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    async def _update(
        self,
        listing_id: UUID,
        patch: ListingPatch,
        uploads: Sequence[ImageUpload],
        expected_updated_at: datetime | None,
    ) -> Listing:
        await self._require_identity("update a listing")

        if patch.is_empty() and not uploads:
            msg = "Nothing to update"
            raise ValidationError(msg)

        values = patch.to_dict()
        needs_current = bool(uploads) or patch.status is not None or patch.images is not None

        if needs_current:
            current = await self._load_for_update(listing_id)

            if patch.status is not None and not current.status.can_transition_to(patch.status):
                raise InvalidStatusTransitionError(current.status, patch.status)

            # An explicit image list in the patch replaces the stored one
            base_urls = patch.images if patch.images is not None else list(current.images)
            base_paths = _paths_for(base_urls, current)

            assets = await self._images.upload_all(current.seller_id, uploads)
            values["images"] = base_urls + [asset.url for asset in assets]
            values["image_paths"] = (
                base_paths + [asset.path for asset in assets]
                if base_paths is not None
                else []
            )

        values["updated_at"] = utc_now()

        try:
            updated = await self._listing_repo.update(
                listing_id,
                values,
                expected_updated_at=expected_updated_at,
            )
        except RemoteError as e:
            raise ListingUpdateFailedError(listing_id, str(e)) from e

        if updated is None:
            if expected_updated_at is not None and await self._exists(listing_id):
                raise ListingUpdateConflictError(listing_id, expected_updated_at)
            raise ListingNotFoundError(listing_id)

        logger.info("Listing updated: %s (%s)", listing_id, ", ".join(sorted(values)))
        return updated

    async def _load_for_update(self, listing_id: UUID) -> Listing:
        try:
            current = await self._listing_repo.find_by_id(listing_id)
        except RemoteError as e:
            raise ListingUpdateFailedError(listing_id, str(e)) from e
        if current is None:
            raise ListingNotFoundError(listing_id)
        return current

    async def _exists(self, listing_id: UUID) -> bool:
        try:
            return await self._listing_repo.find_by_id(listing_id) is not None
        except RemoteError as e:
            raise ListingUpdateFailedError(listing_id, str(e)) from e

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    async def _delete(self, listing_id: UUID) -> bool:
        await self._require_identity("delete a listing")

        try:
            listing = await self._listing_repo.find_by_id(listing_id)
        except RemoteError as e:
            raise ListingDeleteFailedError(listing_id, str(e)) from e

        if listing is None:
            logger.info("Listing %s already absent", listing_id)
            return False

        try:
            paths = listing.storage_paths()
        except ValidationError as e:
            logger.warning("Cannot derive image paths for listing %s: %s", listing_id, e)
            paths = []

        removed = await self._images.remove_all(paths)
        if removed < len(paths):
            logger.warning(
                "Listing %s: %d of %d images left in storage",
                listing_id,
                len(paths) - removed,
                len(paths),
            )

        try:
            await self._listing_repo.delete(listing_id)
        except RemoteError as e:
            raise ListingDeleteFailedError(listing_id, str(e)) from e

        logger.info("Listing deleted: %s", listing_id)
        return True

    async def _require_identity(self, operation: str) -> Identity:
        identity = await self._synchronizer.current_identity()
        if identity is None:
            raise NotAuthenticatedError(operation)
        return identity


def _paths_for(urls: list[str], listing: Listing) -> list[str] | None:
    """Storage paths for ``urls``, or None when any cannot be determined."""
    known: dict[str, str] = {}
    if len(listing.image_paths) == len(listing.images):
        known = dict(zip(listing.images, listing.image_paths))
    try:
        return [known.get(url) or storage_path_from_public_url(url) for url in urls]
    except ValidationError:
        return None
