from nexar.application.commands.messaging.mark_message_read_command import (
    MarkMessageReadCommand,
)
from nexar.application.commands.messaging.send_message_command import (
    SendMessageCommand,
)

__all__ = [
    "MarkMessageReadCommand",
    "SendMessageCommand",
]
