"""Reachability check of the hosted service's collections and buckets."""

import logging
from typing import Sequence

from nexar.application.dtos import ActionReport
from nexar.application.ports import BlobStorePort, RowStorePort
from nexar.domain.shared.exceptions import DomainException

logger = logging.getLogger(__name__)

REQUIRED_COLLECTIONS = ("profiles", "listings", "favorites", "messages", "reviews")


class ConnectionCheckQuery:
    """
    Verify that the service answers and that the expected schema exists.

    Missing collections or an unreachable storage service fail the check.
    Missing buckets are only reported, since they are created by hand.
    """

    def __init__(
        self,
        rows: RowStorePort,
        blobs: BlobStorePort,
        required_buckets: Sequence[str],
        required_collections: Sequence[str] = REQUIRED_COLLECTIONS,
    ):
        self._rows = rows
        self._blobs = blobs
        self._required_buckets = tuple(required_buckets)
        self._required_collections = tuple(required_collections)

    async def execute(self) -> ActionReport:
        try:
            await self._rows.count("profiles")
        except DomainException as e:
            logger.error("Health check failed: %s", e)
            return ActionReport.failed("Database connection failed")

        for collection in self._required_collections:
            try:
                await self._rows.count(collection)
            except DomainException as e:
                logger.error("Collection %s not reachable: %s", collection, e)
                return ActionReport.failed(f"Table {collection} missing")
            logger.debug("Collection %s exists", collection)

        try:
            buckets = set(await self._blobs.list_buckets())
        except DomainException as e:
            logger.error("Storage check failed: %s", e)
            return ActionReport.failed("Storage not accessible")

        missing = [b for b in self._required_buckets if b not in buckets]
        for bucket in missing:
            logger.warning("Bucket %s not found, it must be created manually", bucket)

        if missing:
            return ActionReport.succeeded(
                f"Connection test completed, missing buckets: {', '.join(missing)}"
            )
        return ActionReport.succeeded("Connection test completed")
