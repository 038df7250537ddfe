"""Chat command handling for /play and /stop."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from chatcinema.config import get_logger
from chatcinema.exceptions import (
    AlreadyPlayingError,
    ParseError,
    ScriptLoadError,
    UnknownMovieError,
)
from chatcinema.library import MovieLibrary
from chatcinema.notify.hipchat import ERROR_COLOR, REPLY_COLOR
from chatcinema.playback import EmitSink, PlaybackRegistry

logger = get_logger(__name__)

# Messages HipChat forwards to the webhook
WEBHOOK_PATTERN = r"^/(play|stop)"
COMMAND_PATTERN = re.compile(WEBHOOK_PATTERN + r"(?:\s+(.+?))?\s*$")


@dataclass(frozen=True)
class Command:
    """A parsed chat command."""

    name: str
    argument: str | None = None


@dataclass(frozen=True)
class Reply:
    """Message sent back to the room that issued a command."""

    message: str
    color: str = REPLY_COLOR

    @property
    def is_error(self) -> bool:
        return self.color == ERROR_COLOR


Responder = Callable[[Reply], None]


def parse_command(text: str) -> Command | None:
    """Parse a chat message into a command.

    Returns:
        The command, or None if the message is not a /play or /stop command
    """
    match = COMMAND_PATTERN.match(text.strip())
    if match is None:
        return None
    return Command(name=match.group(1), argument=match.group(2))


def _ignore(reply: Reply) -> None:
    pass


class CommandHandler:
    """Apply chat commands to a room's playback.

    Every reply is passed to the ``respond`` callback as soon as it is
    decided, so the "now playing" announcement reaches the room before the
    first line of the movie.
    """

    def __init__(self, library: MovieLibrary, registry: PlaybackRegistry) -> None:
        self.library = library
        self.registry = registry

    def handle(
        self,
        target: str,
        text: str,
        emit: EmitSink,
        respond: Responder | None = None,
    ) -> Reply:
        """Handle a chat message sent to a target.

        Args:
            target: Playback target (room) the message came from
            text: Raw message text
            emit: Sink used if the command starts playback
            respond: Delivers replies to the room

        Returns:
            The last reply sent for the command
        """
        respond = respond or _ignore
        command = parse_command(text)
        if command is None:
            return self._send(respond, Reply(f"Unknown command: {text.strip()}"))

        logger.info("Received command", target=target, command=command.name)

        if command.name == "stop":
            return self._send(respond, self.stop(target))
        return self.play(target, command.argument or "", emit, respond)

    def stop(self, target: str) -> Reply:
        """Stop the target's movie."""
        if self.registry.stop(target):
            return Reply("Movie stopped")
        return Reply("Movie is not playing!")

    def play(
        self,
        target: str,
        identifier: str,
        emit: EmitSink,
        respond: Responder | None = None,
    ) -> Reply:
        """Load a movie and start playing it for the target."""
        respond = respond or _ignore
        if self.registry.is_playing(target):
            return self._send(respond, Reply("Movie is already playing!"))

        try:
            movie = self.library.load(identifier)
        except UnknownMovieError as e:
            return self._send(
                respond, Reply(f"Allowed movies are [{', '.join(e.allowed)}]")
            )
        except (ScriptLoadError, ParseError) as e:
            logger.error(
                "Failed to load movie",
                target=target,
                movie=identifier,
                error=e.message,
                details=e.details,
            )
            return self._send(
                respond, Reply("Error parsing movie file!", color=ERROR_COLOR)
            )

        announcement = self._send(
            respond, Reply(f'Got it, now playing "{movie.title}"')
        )
        try:
            self.registry.start(target, movie, emit)
        except AlreadyPlayingError:
            # Another request started a movie after the check above
            return self._send(respond, Reply("Movie is already playing!"))
        return announcement

    @staticmethod
    def _send(respond: Responder, reply: Reply) -> Reply:
        respond(reply)
        return reply
