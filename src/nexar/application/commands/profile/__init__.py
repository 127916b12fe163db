from nexar.application.commands.profile.update_profile_command import (
    EDITABLE_PROFILE_FIELDS,
    UpdateProfileCommand,
)
from nexar.application.commands.profile.upload_avatar_command import (
    UploadAvatarCommand,
)

__all__ = [
    "EDITABLE_PROFILE_FIELDS",
    "UpdateProfileCommand",
    "UploadAvatarCommand",
]
