"""Command layer. Write operations beyond the reconciliation services."""

from nexar.application.commands.admin import (
    DeleteListingCommand,
    SetUserSuspensionCommand,
    UpdateListingStatusCommand,
)
from nexar.application.commands.messaging import (
    MarkMessageReadCommand,
    SendMessageCommand,
)
from nexar.application.commands.profile import (
    UpdateProfileCommand,
    UploadAvatarCommand,
)

__all__ = [
    # Admin
    "DeleteListingCommand",
    "SetUserSuspensionCommand",
    "UpdateListingStatusCommand",
    # Messaging
    "MarkMessageReadCommand",
    "SendMessageCommand",
    # Profile
    "UpdateProfileCommand",
    "UploadAvatarCommand",
]
