"""Unit tests for messaging commands."""

from uuid import uuid4

import pytest

from nexar.application.commands import MarkMessageReadCommand, SendMessageCommand
from nexar.domain.identity import NotAuthenticatedError
from nexar.domain.listing import ListingNotFoundError
from nexar.domain.profile import ProfileRequiredError
from nexar.domain.shared.exceptions import EntityNotFoundError
from tests.shared.fixtures import (
    TestIdentityFactory,
    TestListingFactory,
    TestProfileFactory,
)


@pytest.fixture
def send_message(synchronizer, messages, listings) -> SendMessageCommand:
    return SendMessageCommand(synchronizer, messages, listings)


class TestSendMessageCommand:
    """Tests for sending a message about a listing."""

    async def test_sender_and_receiver_are_profile_ids(
        self, send_message, auth, profiles, listings, messages
    ):
        auth.current = TestIdentityFactory.bob()
        profiles.rows[TestIdentityFactory.BOB_ID] = TestProfileFactory.bob()
        listing = TestListingFactory.stored(seller=TestProfileFactory.alice())
        listings.rows[listing.id] = listing

        message = await send_message.execute(listing.id, "Is it still available?")

        assert message.sender_id == TestProfileFactory.BOB_PROFILE_ID
        assert message.receiver_id == TestProfileFactory.ALICE_PROFILE_ID
        assert message.listing_id == listing.id
        assert message.id in messages.rows

    async def test_explicit_receiver_skips_listing_lookup(
        self, send_message, auth, profiles, listings
    ):
        auth.current = TestIdentityFactory.alice()
        profiles.rows[TestIdentityFactory.ALICE_ID] = TestProfileFactory.alice()
        listings.fail_lookup = True

        message = await send_message.execute(
            TestListingFactory.LISTING_ID,
            "Yes, come by tomorrow",
            receiver_id=TestProfileFactory.BOB_PROFILE_ID,
        )

        assert message.receiver_id == TestProfileFactory.BOB_PROFILE_ID

    async def test_requires_identity(self, send_message):
        with pytest.raises(NotAuthenticatedError):
            await send_message.execute(TestListingFactory.LISTING_ID, "Hello")

    async def test_requires_profile(self, send_message, auth):
        auth.current = TestIdentityFactory.bob()

        with pytest.raises(ProfileRequiredError):
            await send_message.execute(TestListingFactory.LISTING_ID, "Hello")

    async def test_unknown_listing(self, send_message, auth, profiles):
        auth.current = TestIdentityFactory.bob()
        profiles.rows[TestIdentityFactory.BOB_ID] = TestProfileFactory.bob()

        with pytest.raises(ListingNotFoundError):
            await send_message.execute(TestListingFactory.LISTING_ID, "Hello")


class TestMarkMessageReadCommand:
    async def test_marks_read(self, send_message, auth, profiles, listings, messages):
        auth.current = TestIdentityFactory.bob()
        profiles.rows[TestIdentityFactory.BOB_ID] = TestProfileFactory.bob()
        listing = TestListingFactory.stored()
        listings.rows[listing.id] = listing
        sent = await send_message.execute(listing.id, "Hello")

        message = await MarkMessageReadCommand(messages).execute(sent.id)

        assert message.read is True

    async def test_unknown_message(self, messages):
        with pytest.raises(EntityNotFoundError):
            await MarkMessageReadCommand(messages).execute(uuid4())
