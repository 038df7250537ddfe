"""Per-target playback tracking.

Each target (a chat room) plays at most one movie at a time. All play,
stop and completion bookkeeping goes through a single lock so a stop that
races a natural completion, or two concurrent play requests, resolve in a
well defined order.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from chatcinema.config import get_logger
from chatcinema.exceptions import AlreadyPlayingError
from chatcinema.parser.models import Movie
from chatcinema.playback.scheduler import EmitSink, PlaybackOutcome, PlaybackScheduler

logger = get_logger(__name__)


class PlaybackRun:
    """A single playback of a movie for one target, on its own thread."""

    def __init__(
        self,
        target: str,
        movie: Movie,
        emit: EmitSink,
        scheduler: PlaybackScheduler,
    ) -> None:
        self.target = target
        self.movie = movie
        self.stop_event = threading.Event()
        self.outcome: PlaybackOutcome | None = None
        self._emit = emit
        self._scheduler = scheduler
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        """Whether the playback thread is still alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self, on_exit: Callable[[PlaybackRun], None]) -> None:
        """Start the playback thread.

        Args:
            on_exit: Called from the playback thread once it finishes
        """
        self._thread = threading.Thread(
            target=self._run,
            args=(on_exit,),
            name=f"playback-{self.target}",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Ask the playback thread to stop."""
        self.stop_event.set()

    def join(self, timeout: float | None = None) -> PlaybackOutcome | None:
        """Wait for the playback thread to finish.

        Args:
            timeout: Maximum seconds to wait

        Returns:
            The outcome, or None if the run is still going
        """
        if self._thread is not None:
            self._thread.join(timeout)
        return self.outcome

    def _run(self, on_exit: Callable[[PlaybackRun], None]) -> None:
        try:
            self.outcome = self._scheduler.play(self.movie, self.stop_event, self._emit)
        except Exception:
            logger.exception(
                "Playback crashed", target=self.target, title=self.movie.title
            )
            self.outcome = PlaybackOutcome.ABORTED
        finally:
            on_exit(self)


class PlaybackRegistry:
    """Track the active playback run of every target."""

    def __init__(
        self,
        scheduler: PlaybackScheduler | None = None,
        on_finish: Callable[[PlaybackRun], None] | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            scheduler: Scheduler shared by all runs
            on_finish: Called after a run ends and has been unregistered
        """
        self.scheduler = scheduler or PlaybackScheduler()
        self.on_finish = on_finish
        self._runs: dict[str, PlaybackRun] = {}
        self._lock = threading.Lock()

    def start(self, target: str, movie: Movie, emit: EmitSink) -> PlaybackRun:
        """Start playing a movie for a target.

        Args:
            target: Playback target identifier
            movie: Movie to play
            emit: Sink receiving each line

        Returns:
            The started run

        Raises:
            AlreadyPlayingError: If the target already has an active run
        """
        with self._lock:
            current = self._runs.get(target)
            if current is not None:
                raise AlreadyPlayingError(target, current.movie.title)
            run = PlaybackRun(target, movie, emit, self.scheduler)
            self._runs[target] = run
            run.start(self._finished)

        logger.info("Started playback", target=target, title=movie.title)
        return run

    def stop(self, target: str) -> bool:
        """Stop the active run of a target.

        Args:
            target: Playback target identifier

        Returns:
            True if a run was stopped, False if nothing was playing
        """
        with self._lock:
            run = self._runs.pop(target, None)
            if run is None:
                return False
            run.stop()

        logger.info("Stopped playback", target=target, title=run.movie.title)
        return True

    def stop_all(self) -> list[PlaybackRun]:
        """Stop every active run.

        Returns:
            The runs that were signalled
        """
        with self._lock:
            runs = list(self._runs.values())
            self._runs.clear()
            for run in runs:
                run.stop()

        if runs:
            logger.info("Stopped all playback", count=len(runs))
        return runs

    def is_playing(self, target: str) -> bool:
        """Check whether a target has an active run."""
        with self._lock:
            return target in self._runs

    def get(self, target: str) -> PlaybackRun | None:
        """Get the active run of a target, if any."""
        with self._lock:
            return self._runs.get(target)

    def active_targets(self) -> list[str]:
        """List targets with an active run."""
        with self._lock:
            return sorted(self._runs)

    def _finished(self, run: PlaybackRun) -> None:
        with self._lock:
            # A stopped run may already have been replaced by a newer one
            if self._runs.get(run.target) is run:
                del self._runs[run.target]

        logger.info(
            "Playback finished",
            target=run.target,
            title=run.movie.title,
            outcome=run.outcome.value if run.outcome else None,
        )

        if self.on_finish is not None:
            try:
                self.on_finish(run)
            except Exception as e:
                logger.error(
                    "Playback finish callback failed",
                    target=run.target,
                    error=str(e),
                )
