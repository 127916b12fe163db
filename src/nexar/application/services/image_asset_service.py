"""Image upload and removal against one storage bucket."""

import logging
from typing import Sequence
from uuid import UUID

from nexar.application.ports import BlobStorePort
from nexar.domain.listing import AssetUploadFailedError, ImageAsset, ImageUpload
from nexar.domain.shared.exceptions import RemoteError

logger = logging.getLogger(__name__)


class ImageAssetService:
    """Stores images under their owner's namespace in a single bucket."""

    def __init__(
        self,
        blobs: BlobStorePort,
        bucket: str,
        cache_control: str | None = None,
    ):
        self._blobs = blobs
        self._bucket = bucket
        self._cache_control = cache_control

    @property
    def bucket(self) -> str:
        return self._bucket

    async def upload(self, namespace: UUID, upload: ImageUpload) -> ImageAsset:
        """Upload one image under a fresh key in ``namespace``.

        Raises
        ------
        AssetUploadFailedError
            If the storage service rejected the upload
        """
        path = upload.storage_path(namespace)
        try:
            stored_path = await self._blobs.upload(
                self._bucket,
                path,
                upload.content,
                content_type=upload.content_type,
                cache_control=self._cache_control,
                upsert=False,
            )
        except RemoteError as e:
            raise AssetUploadFailedError(upload.filename, str(e)) from e

        url = self._blobs.public_url(self._bucket, stored_path)
        logger.debug("Uploaded %s to %s/%s", upload.filename, self._bucket, stored_path)
        return ImageAsset(path=stored_path, url=url)

    async def upload_all(
        self,
        namespace: UUID,
        uploads: Sequence[ImageUpload],
    ) -> list[ImageAsset]:
        """Upload sequentially, skipping failures; input order is preserved."""
        assets: list[ImageAsset] = []
        for upload in uploads:
            try:
                assets.append(await self.upload(namespace, upload))
            except AssetUploadFailedError as e:
                logger.warning("Skipping image: %s", e)
        return assets

    async def remove_all(self, paths: Sequence[str]) -> int:
        """Remove each object independently; returns how many were removed."""
        removed = 0
        for path in paths:
            try:
                await self._blobs.remove(self._bucket, [path])
            except RemoteError as e:
                logger.warning("Could not remove %s/%s: %s", self._bucket, path, e)
                continue
            removed += 1
        return removed
