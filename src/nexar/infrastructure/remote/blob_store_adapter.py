"""Blob store port over the hosted service's storage API."""

import logging
from typing import Sequence

from nexar.application.ports import BlobStorePort
from nexar.infrastructure.remote.http import RemoteHttpClient, json_rows

logger = logging.getLogger(__name__)

STORAGE_PATH = "/storage/v1"


class RemoteBlobStoreAdapter(BlobStorePort):
    def __init__(self, http: RemoteHttpClient):
        self._http = http

    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        *,
        content_type: str | None = None,
        cache_control: str | None = None,
        upsert: bool = False,
    ) -> str:
        headers = {
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "true" if upsert else "false",
        }
        if cache_control:
            headers["Cache-Control"] = f"max-age={cache_control}"

        await self._http.request(
            "POST",
            f"{STORAGE_PATH}/object/{bucket}/{path}",
            content=content,
            headers=headers,
        )
        logger.debug("Stored %d bytes at %s/%s", len(content), bucket, path)
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self._http.base_url}{STORAGE_PATH}/object/public/{bucket}/{path}"

    async def remove(self, bucket: str, paths: Sequence[str]) -> None:
        if not paths:
            return
        await self._http.request(
            "DELETE",
            f"{STORAGE_PATH}/object/{bucket}",
            json={"prefixes": list(paths)},
        )

    async def list_buckets(self) -> list[str]:
        response = await self._http.request("GET", f"{STORAGE_PATH}/bucket")
        buckets = json_rows(response, "storage buckets")
        return [bucket["name"] for bucket in buckets if "name" in bucket]
