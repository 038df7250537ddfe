"""Unit tests for the playback scheduler."""

import threading
import time

import pytest

from chatcinema.exceptions import PlaybackAbortedError
from chatcinema.parser import NARRATOR
from chatcinema.playback import PlaybackOutcome, PlaybackScheduler, iter_cues
from tests.fixtures import make_movie


class Recorder:
    """Emit sink that records the text of every line it receives."""

    def __init__(self, on_emit=None):
        self.texts: list[str] = []
        self.actors: list[str] = []
        self.on_emit = on_emit

    def __call__(self, scene, line):
        self.texts.append(line.text)
        self.actors.append(line.actor)
        if self.on_emit is not None:
            self.on_emit(len(self.texts), line)


def test_iter_cues_order(movie):
    """Test each intro precedes its scene's lines."""
    texts = [line.text for _, line in iter_cues(movie)]

    assert texts == [
        "<em>Scene 1</em>",
        "S1L1",
        "S1L2",
        "S1L3",
        "<em>Scene 2</em>",
        "S2L1",
        "S2L2",
        "S2L3",
        "<em>Scene 3</em>",
        "S3L1",
        "S3L2",
        "S3L3",
    ]


def test_iter_cues_pairs_lines_with_their_scene(movie):
    """Test the scene yielded with a line is the scene containing it."""
    for scene, line in iter_cues(movie):
        assert line == scene.intro_line or line in scene.lines


class TestPlaybackScheduler:
    """Test cases for PlaybackScheduler.play."""

    def test_play_to_completion(self, movie):
        """Test every line is emitted exactly once, in order."""
        recorder = Recorder()

        outcome = PlaybackScheduler().play(movie, threading.Event(), recorder)

        assert outcome == PlaybackOutcome.COMPLETED
        assert recorder.texts == [line.text for _, line in iter_cues(movie)]
        assert recorder.actors.count(NARRATOR) == 3

    def test_stop_before_start_emits_nothing(self, movie):
        """Test a pre-set stop event prevents any emission."""
        recorder = Recorder()
        stop = threading.Event()
        stop.set()

        outcome = PlaybackScheduler().play(movie, stop, recorder)

        assert outcome == PlaybackOutcome.STOPPED
        assert recorder.texts == []

    def test_stop_from_sink_ends_after_current_line(self, movie):
        """Test no line is emitted after the stop event is set."""
        stop = threading.Event()

        def stop_after_third(count, line):
            if count == 3:
                stop.set()

        recorder = Recorder(on_emit=stop_after_third)

        outcome = PlaybackScheduler().play(movie, stop, recorder)

        assert outcome == PlaybackOutcome.STOPPED
        assert recorder.texts == ["<em>Scene 1</em>", "S1L1", "S1L2"]

    @pytest.mark.timeout(10)
    def test_stop_interrupts_pause(self):
        """Test stopping during a long pause returns promptly."""
        movie = make_movie(scenes=1, lines=2, delay=30.0)
        stop = threading.Event()
        recorder = Recorder()
        outcome: list[PlaybackOutcome] = []

        thread = threading.Thread(
            target=lambda: outcome.append(
                PlaybackScheduler().play(movie, stop, recorder)
            )
        )
        thread.start()
        while len(recorder.texts) < 2:
            time.sleep(0.01)

        started = time.monotonic()
        stop.set()
        thread.join(timeout=5)

        assert not thread.is_alive()
        assert time.monotonic() - started < 2
        assert outcome == [PlaybackOutcome.STOPPED]
        assert recorder.texts == ["<em>Scene 1</em>", "S1L1"]

    @pytest.mark.timeout(10)
    def test_delays_are_observed(self):
        """Test the pause after each line is scaled by the speed."""
        movie = make_movie(scenes=1, lines=2, delay=1.0)
        timestamps: list[float] = []

        def record_time(scene, line):
            timestamps.append(time.monotonic())

        outcome = PlaybackScheduler(speed=10.0).play(
            movie, threading.Event(), record_time
        )

        assert outcome == PlaybackOutcome.COMPLETED
        assert len(timestamps) == 3
        # each dialogue line waits 1.0 / 10
        assert timestamps[2] - timestamps[1] >= 0.08

    def test_sink_abort_ends_playback(self, movie):
        """Test PlaybackAbortedError from the sink ends the run."""

        def abort_on_second(count, line):
            if count == 2:
                raise PlaybackAbortedError(message="Room went away")

        recorder = Recorder(on_emit=abort_on_second)

        outcome = PlaybackScheduler().play(movie, threading.Event(), recorder)

        assert outcome == PlaybackOutcome.ABORTED
        assert recorder.texts == ["<em>Scene 1</em>", "S1L1"]

    def test_sink_failure_skips_line_and_continues(self, movie):
        """Test an ordinary sink error is logged and playback continues."""

        def fail_on_second(count, line):
            if count == 2:
                raise RuntimeError("send failed")

        recorder = Recorder(on_emit=fail_on_second)

        outcome = PlaybackScheduler().play(movie, threading.Event(), recorder)

        assert outcome == PlaybackOutcome.COMPLETED
        assert len(recorder.texts) == 12

    def test_empty_scenes_only_emit_intros(self):
        """Test scenes without dialogue still announce their intro."""
        movie = make_movie(scenes=2, lines=0)
        recorder = Recorder()

        outcome = PlaybackScheduler().play(movie, threading.Event(), recorder)

        assert outcome == PlaybackOutcome.COMPLETED
        assert recorder.texts == ["<em>Scene 1</em>", "<em>Scene 2</em>"]

    @pytest.mark.parametrize("speed", [0, -1.0])
    def test_invalid_speed(self, speed):
        """Test the speed multiplier must be positive."""
        with pytest.raises(ValueError, match="must be positive"):
            PlaybackScheduler(speed=speed)
