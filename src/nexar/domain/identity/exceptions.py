"""Identity domain exceptions."""

from nexar.domain.shared.exceptions import AuthorizationError, ErrorCode


class NotAuthenticatedError(AuthorizationError):
    """No authenticated identity for an operation that requires one."""

    def __init__(self, operation: str | None = None) -> None:
        message = "User is not authenticated"
        if operation:
            message = f"User must be authenticated to {operation}"
        super().__init__(
            message=message,
            code=ErrorCode.NOT_AUTHENTICATED,
            details={"operation": operation},
        )


class AdminRequiredError(AuthorizationError):
    """The current identity is not an administrator."""

    def __init__(self, email: str | None = None) -> None:
        super().__init__(
            message="Administrator rights are required",
            code=ErrorCode.ADMIN_REQUIRED,
            details={"email": email},
        )
