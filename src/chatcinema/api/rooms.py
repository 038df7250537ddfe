"""Rooms the add-on is installed in."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from chatcinema.commands import Reply
from chatcinema.config import get_logger
from chatcinema.exceptions import NotificationError
from chatcinema.notify import RoomNotifier

logger = get_logger(__name__)


@dataclass
class Room:
    """An installation of the add-on in a single room."""

    client_id: str
    room_id: str
    notifier: RoomNotifier

    def respond(self, reply: Reply) -> None:
        """Send a command reply, logging delivery failures."""
        try:
            if reply.is_error:
                self.notifier.reply_error(reply.message)
            else:
                self.notifier.reply(reply.message, color=reply.color)
        except NotificationError as e:
            logger.error(
                "Failed to send reply",
                room=self.room_id,
                message=reply.message,
                error=e.message,
            )


class RoomRegistry:
    """Thread-safe map of OAuth client ids to installed rooms."""

    def __init__(self) -> None:
        self._rooms: dict[str, Room] = {}
        self._lock = threading.Lock()

    def add(self, room: Room) -> None:
        with self._lock:
            self._rooms[room.client_id] = room
        logger.info("Registered room", client_id=room.client_id, room=room.room_id)

    def remove(self, client_id: str) -> Room | None:
        with self._lock:
            room = self._rooms.pop(client_id, None)
        if room is None:
            logger.info("Not a registered client id", client_id=client_id)
        return room

    def get(self, client_id: str) -> Room | None:
        with self._lock:
            return self._rooms.get(client_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)
