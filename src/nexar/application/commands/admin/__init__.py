from nexar.application.commands.admin.delete_listing_command import (
    DeleteListingCommand,
)
from nexar.application.commands.admin.set_user_suspension_command import (
    SetUserSuspensionCommand,
)
from nexar.application.commands.admin.update_listing_status_command import (
    UpdateListingStatusCommand,
)

__all__ = [
    "DeleteListingCommand",
    "SetUserSuspensionCommand",
    "UpdateListingStatusCommand",
]
