"""Cancellable movie playback."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from enum import Enum

from chatcinema.config import get_logger
from chatcinema.exceptions import PlaybackAbortedError
from chatcinema.parser.models import Line, Movie, Scene

logger = get_logger(__name__)

# Receives every line in playback order, scene intros included
EmitSink = Callable[[Scene, Line], None]


class PlaybackOutcome(str, Enum):
    """How a playback run ended."""

    COMPLETED = "completed"
    STOPPED = "stopped"
    ABORTED = "aborted"


def iter_cues(movie: Movie) -> Iterator[tuple[Scene, Line]]:
    """Yield every (scene, line) pair in playback order.

    Each scene's intro comes first, followed by its dialogue.
    """
    for scene in movie.scenes:
        yield scene, scene.intro_line
        for line in scene.lines:
            yield scene, line


class PlaybackScheduler:
    """Emit a movie's lines one at a time, pausing between them."""

    def __init__(self, speed: float = 1.0) -> None:
        """Initialize the scheduler.

        Args:
            speed: Playback speed multiplier; delays are divided by it
        """
        if speed <= 0:
            raise ValueError(f"Playback speed must be positive, got {speed}")
        self.speed = speed

    def play(
        self, movie: Movie, stop: threading.Event, emit: EmitSink
    ) -> PlaybackOutcome:
        """Play a movie until it ends or ``stop`` is set.

        The stop event is checked before every line and interrupts the
        pause after a line as soon as it is set.

        Args:
            movie: Movie to play
            stop: Cancellation token for this run
            emit: Sink called synchronously for each line

        Returns:
            COMPLETED when every line was emitted, STOPPED when ``stop``
            was set, ABORTED when the sink raised PlaybackAbortedError
        """
        emitted = 0
        logger.info("Playback started", title=movie.title, scenes=len(movie.scenes))

        for cue, (scene, line) in enumerate(iter_cues(movie)):
            if stop.is_set():
                logger.info("Playback stopped", title=movie.title, emitted=emitted)
                return PlaybackOutcome.STOPPED

            try:
                emit(scene, line)
            except PlaybackAbortedError as e:
                logger.warning(
                    "Playback aborted by sink",
                    title=movie.title,
                    emitted=emitted,
                    reason=e.message,
                )
                return PlaybackOutcome.ABORTED
            except Exception as e:
                logger.error(
                    "Failed to emit line",
                    title=movie.title,
                    cue=cue,
                    actor=line.actor,
                    error=str(e),
                    error_type=type(e).__name__,
                )
            emitted += 1

            if line.delay > 0 and stop.wait(line.delay / self.speed):
                logger.info("Playback stopped", title=movie.title, emitted=emitted)
                return PlaybackOutcome.STOPPED

        logger.info("Playback completed", title=movie.title, emitted=emitted)
        return PlaybackOutcome.COMPLETED
