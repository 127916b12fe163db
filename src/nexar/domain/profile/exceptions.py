"""Profile domain exceptions."""

from uuid import UUID

from nexar.domain.shared.exceptions import (
    BusinessRuleViolation,
    DomainException,
    ErrorCode,
)


class ProfileRequiredError(BusinessRuleViolation):
    """The identity exists but has no profile, and creation is not implicit."""

    def __init__(self, user_id: UUID | None = None) -> None:
        super().__init__(
            message="A profile is required. Please complete your profile first.",
            code=ErrorCode.PROFILE_REQUIRED,
            details={"user_id": str(user_id) if user_id else None},
        )


class ProfileCreationFailedError(DomainException):
    """Inserting a new profile failed."""

    def __init__(self, user_id: UUID, reason: str) -> None:
        super().__init__(
            message=f"Profile could not be created: {reason}",
            code=ErrorCode.PROFILE_CREATION_FAILED,
            details={"user_id": str(user_id), "reason": reason},
        )
