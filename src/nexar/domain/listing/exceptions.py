"""Listing domain exceptions."""

from typing import Any
from uuid import UUID

from nexar.domain.listing.value_objects import ListingStatus
from nexar.domain.shared.exceptions import (
    ConcurrencyError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class ListingNotFoundError(EntityNotFoundError):
    """Raised when a listing cannot be found."""

    def __init__(self, listing_id: UUID) -> None:
        super().__init__(
            message=f"Listing '{listing_id}' not found",
            code=ErrorCode.LISTING_NOT_FOUND,
            details={"listing_id": str(listing_id)},
        )


class ListingCreationFailedError(DomainException):
    """Inserting the listing row failed; uploaded images stay orphaned."""

    def __init__(self, reason: str, orphaned_paths: list[str] | None = None) -> None:
        super().__init__(
            message=f"Listing could not be created: {reason}",
            code=ErrorCode.LISTING_CREATION_FAILED,
            details={"reason": reason, "orphaned_paths": orphaned_paths or []},
        )


class ListingUpdateFailedError(DomainException):
    """Updating the listing row failed."""

    def __init__(self, listing_id: UUID, reason: str) -> None:
        super().__init__(
            message=f"Listing '{listing_id}' could not be updated: {reason}",
            code=ErrorCode.LISTING_UPDATE_FAILED,
            details={"listing_id": str(listing_id), "reason": reason},
        )


class ListingDeleteFailedError(DomainException):
    """Deleting the listing row failed."""

    def __init__(self, listing_id: UUID, reason: str) -> None:
        super().__init__(
            message=f"Listing '{listing_id}' could not be deleted: {reason}",
            code=ErrorCode.LISTING_DELETE_FAILED,
            details={"listing_id": str(listing_id), "reason": reason},
        )


class ListingUpdateConflictError(ConcurrencyError):
    """The listing changed since the caller last read it."""

    def __init__(self, listing_id: UUID, expected_updated_at: Any) -> None:
        super().__init__(
            message=f"Listing '{listing_id}' was modified by another client",
            details={
                "listing_id": str(listing_id),
                "expected_updated_at": str(expected_updated_at),
            },
        )


class InvalidStatusTransitionError(ValidationError):
    """The requested status change is not allowed."""

    def __init__(self, current: ListingStatus, target: ListingStatus) -> None:
        super().__init__(
            message=f"Cannot change listing status from {current.value} to {target.value}",
            code=ErrorCode.INVALID_STATUS_TRANSITION,
            details={"current": current.value, "target": target.value},
        )


class AssetUploadFailedError(DomainException):
    """A single image upload failed."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(
            message=f"Image '{filename}' could not be uploaded: {reason}",
            code=ErrorCode.ASSET_UPLOAD_FAILED,
            details={"filename": filename, "reason": reason},
        )
