"""Unit tests for ImageAssetService."""

import pytest

from nexar.domain.listing import AssetUploadFailedError
from tests.shared.fixtures import TestListingFactory, TestProfileFactory

OWNER = TestProfileFactory.ALICE_PROFILE_ID


class TestUpload:
    async def test_stores_under_owner_namespace(self, listing_images, blobs):
        asset = await listing_images.upload(OWNER, TestListingFactory.upload("car.png"))

        assert asset.namespace == str(OWNER)
        assert asset.path.endswith(".png")
        assert asset.url == TestListingFactory.public_url("listing-images", asset.path)
        assert asset.path in blobs.objects["listing-images"]

    async def test_never_overwrites(self, listing_images, blobs):
        await listing_images.upload(OWNER, TestListingFactory.upload())

        call = blobs.upload_calls[0]
        assert call["upsert"] is False
        assert call["cache_control"] == "3600"
        assert call["content_type"] == "image/jpeg"

    async def test_failure_raises_asset_upload_failed(self, listing_images, blobs):
        blobs.fail_uploads = {1}

        with pytest.raises(AssetUploadFailedError) as exc_info:
            await listing_images.upload(OWNER, TestListingFactory.upload("car.jpg"))

        assert exc_info.value.details["filename"] == "car.jpg"


class TestUploadAll:
    async def test_skips_failures_and_keeps_order(self, listing_images, blobs):
        blobs.fail_uploads = {2}
        uploads = TestListingFactory.uploads(3)

        assets = await listing_images.upload_all(OWNER, uploads)

        assert len(assets) == 2
        stored = blobs.objects["listing-images"]
        assert [stored[a.path] for a in assets] == [b"image-1", b"image-3"]

    async def test_all_failing_returns_empty(self, listing_images, blobs):
        blobs.fail_uploads = {1, 2}

        assert await listing_images.upload_all(OWNER, TestListingFactory.uploads(2)) == []


class TestRemoveAll:
    async def test_removes_each_path_independently(self, listing_images, blobs):
        blobs.fail_removals = {"ns/b.jpg"}

        removed = await listing_images.remove_all(["ns/a.jpg", "ns/b.jpg", "ns/c.jpg"])

        assert removed == 2
        assert blobs.remove_calls == [["ns/a.jpg"], ["ns/b.jpg"], ["ns/c.jpg"]]

    async def test_nothing_to_remove(self, listing_images, blobs):
        assert await listing_images.remove_all([]) == 0
        assert blobs.remove_calls == []
