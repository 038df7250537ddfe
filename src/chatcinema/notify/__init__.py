"""Chat notification transport."""

from __future__ import annotations

from .hipchat import (
    ERROR_COLOR,
    REPLY_COLOR,
    SCOPE_SEND_NOTIFICATION,
    AccessToken,
    HipChatClient,
    RoomNotifier,
)

__all__ = [
    "ERROR_COLOR",
    "REPLY_COLOR",
    "SCOPE_SEND_NOTIFICATION",
    "AccessToken",
    "HipChatClient",
    "RoomNotifier",
]
