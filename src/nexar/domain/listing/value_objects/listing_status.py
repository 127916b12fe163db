"""Listing status enumeration."""

from enum import Enum


class ListingStatus(str, Enum):
    """Publication state of a listing.

    ``pending`` waits for an administrator decision; deletion is terminal and
    has no status of its own.
    """

    PENDING = "pending"
    ACTIVE = "active"
    SOLD = "sold"
    REJECTED = "rejected"

    def allowed_transitions(self) -> frozenset["ListingStatus"]:
        return _TRANSITIONS[self]

    def can_transition_to(self, target: "ListingStatus") -> bool:
        if target == self:
            return True
        return target in _TRANSITIONS[self]

    def is_visible(self) -> bool:
        return self in [ListingStatus.ACTIVE, ListingStatus.SOLD]


_TRANSITIONS: dict[ListingStatus, frozenset[ListingStatus]] = {
    ListingStatus.PENDING: frozenset({ListingStatus.ACTIVE, ListingStatus.REJECTED}),
    ListingStatus.ACTIVE: frozenset({ListingStatus.SOLD}),
    ListingStatus.SOLD: frozenset({ListingStatus.ACTIVE}),
    ListingStatus.REJECTED: frozenset(),
}
