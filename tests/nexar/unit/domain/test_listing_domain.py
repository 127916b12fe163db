"""Unit tests for the listing aggregate and its value objects."""

from decimal import Decimal
from uuid import UUID

import pytest

from nexar.domain.listing import (
    ImageAsset,
    ImageUpload,
    Listing,
    ListingFilters,
    ListingPatch,
    ListingStatus,
    storage_path_from_public_url,
)
from nexar.domain.shared.exceptions import ValidationError
from tests.shared.fixtures import TestListingFactory, TestProfileFactory


class TestListingStatus:
    """Tests for the moderation status graph."""

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (ListingStatus.PENDING, ListingStatus.ACTIVE),
            (ListingStatus.PENDING, ListingStatus.REJECTED),
            (ListingStatus.ACTIVE, ListingStatus.SOLD),
            (ListingStatus.SOLD, ListingStatus.ACTIVE),
        ],
    )
    def test_allowed_transitions(self, current, target):
        assert current.can_transition_to(target) is True

    @pytest.mark.parametrize(
        ("current", "target"),
        [
            (ListingStatus.REJECTED, ListingStatus.ACTIVE),
            (ListingStatus.SOLD, ListingStatus.PENDING),
            (ListingStatus.ACTIVE, ListingStatus.PENDING),
        ],
    )
    def test_forbidden_transitions(self, current, target):
        assert current.can_transition_to(target) is False

    def test_same_status_is_always_allowed(self):
        """Re-applying the current status is a no-op, not a transition."""
        assert ListingStatus.REJECTED.can_transition_to(ListingStatus.REJECTED)

    def test_visibility(self):
        assert ListingStatus.ACTIVE.is_visible()
        assert ListingStatus.SOLD.is_visible()
        assert not ListingStatus.PENDING.is_visible()


class TestListingDraft:
    """Tests for draft validation."""

    def test_normalizes_category_to_lowercase(self):
        draft = TestListingFactory.draft(category="  Autoturisme ")

        assert draft.category == "autoturisme"

    def test_coerces_price_to_decimal(self):
        draft = TestListingFactory.draft(price=8900.5)

        assert draft.price == Decimal("8900.5")

    def test_rejects_empty_title(self):
        with pytest.raises(ValidationError, match="title"):
            TestListingFactory.draft(title="   ")

    def test_rejects_negative_price(self):
        with pytest.raises(ValidationError, match="negative"):
            TestListingFactory.draft(price=Decimal("-1"))

    @pytest.mark.parametrize(
        ("price", "message"),
        [
            ("abc", "not a number"),
            (Decimal("NaN"), "finite"),
            (float("inf"), "finite"),
        ],
    )
    def test_rejects_unusable_price(self, price, message):
        with pytest.raises(ValidationError, match=message):
            TestListingFactory.draft(price=price)

    def test_rejects_implausible_year(self):
        with pytest.raises(ValidationError, match="year"):
            TestListingFactory.draft(year=1800)

    def test_rejects_negative_mileage(self):
        with pytest.raises(ValidationError, match="mileage"):
            TestListingFactory.draft(mileage=-5)


class TestListingPatch:
    """Tests for partial updates."""

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            ListingPatch.of(seller_id="someone-else")

        assert exc_info.value.details["fields"] == ["seller_id"]

    def test_coerces_status_string(self):
        patch = ListingPatch.of(status="sold")

        assert patch.status is ListingStatus.SOLD

    def test_rejects_unknown_status(self):
        with pytest.raises(ValidationError, match="Unknown listing status"):
            ListingPatch.of(status="archived")

    def test_images_absent_unless_set(self):
        assert ListingPatch.of(title="New title").images is None
        assert ListingPatch.of(images=[]).images == []

    @pytest.mark.parametrize("price", ["abc", "NaN", "-10"])
    def test_rejects_invalid_price(self, price):
        with pytest.raises(ValidationError, match="price"):
            ListingPatch.of(price=price)

    def test_coerces_price(self):
        assert ListingPatch.of(price="7500.50").to_dict()["price"] == Decimal("7500.50")

    def test_empty_patch(self):
        assert ListingPatch(values={}).is_empty()


class TestListingCreate:
    """Tests for Listing.create seller binding."""

    def test_binds_profile_id_as_seller(self):
        seller = TestProfileFactory.alice()
        assets = [ImageAsset(path=f"{seller.id}/a.jpg", url="https://cdn/a.jpg")]

        listing = Listing.create(TestListingFactory.draft(), seller=seller, images=assets)

        assert listing.seller_id == seller.id
        assert listing.seller_id != seller.user_id
        assert listing.seller_name == "Alice"
        assert listing.images == ["https://cdn/a.jpg"]
        assert listing.image_paths == [f"{seller.id}/a.jpg"]

    def test_starts_with_zero_counters(self):
        listing = Listing.create(TestListingFactory.draft(), seller=TestProfileFactory.bob())

        assert listing.views_count == 0
        assert listing.favorites_count == 0
        assert listing.featured is False
        assert listing.status is ListingStatus.ACTIVE

    def test_status_can_start_pending(self):
        listing = Listing.create(
            TestListingFactory.draft(),
            seller=TestProfileFactory.alice(),
            status=ListingStatus.PENDING,
        )

        assert listing.status is ListingStatus.PENDING


class TestStoragePaths:
    """Tests for recovering storage paths of a listing's images."""

    def test_prefers_persisted_paths(self):
        listing = TestListingFactory.stored(
            images=["https://cdn/x/ignored.jpg"],
            image_paths=["owner/real.jpg"],
        )

        assert listing.storage_paths() == ["owner/real.jpg"]

    def test_derives_paths_from_urls_for_older_rows(self):
        url = TestListingFactory.public_url("listing-images", "owner/photo.jpg")
        listing = TestListingFactory.stored(images=[url])

        assert listing.storage_paths() == ["owner/photo.jpg"]

    def test_url_derivation_uses_last_two_segments(self):
        assert storage_path_from_public_url("https://h/a/b/c/ns/file.png") == "ns/file.png"

    def test_url_without_segments_is_rejected(self):
        with pytest.raises(ValidationError):
            storage_path_from_public_url("file.png")


class TestImageUpload:
    """Tests for storage key derivation."""

    def test_path_keeps_extension_under_namespace(self):
        namespace = UUID("a1a1a1a1-a1a1-a1a1-a1a1-a1a1a1a1a1a1")

        path = ImageUpload("Front.JPG", b"x").storage_path(namespace)

        owner, name = path.split("/")
        assert owner == str(namespace)
        assert name.endswith(".jpg")
        UUID(name[: -len(".jpg")])

    def test_path_without_extension(self):
        path = ImageUpload("photo", b"x").storage_path("ns")

        assert "." not in path.split("/")[1]

    def test_paths_are_unique(self):
        upload = ImageUpload("photo.jpg", b"x")

        assert upload.storage_path("ns") != upload.storage_path("ns")

    def test_empty_filename_rejected(self):
        with pytest.raises(ValidationError):
            ImageUpload("", b"x")

    def test_asset_namespace(self):
        assert ImageAsset(path="owner/file.jpg", url="u").namespace == "owner"


class TestListingFilters:
    def test_default_is_empty(self):
        assert ListingFilters().is_empty()

    def test_any_value_makes_it_non_empty(self):
        assert not ListingFilters(mileage_max=100000).is_empty()
