"""Movie playback: the scheduler and the per-target registry."""

from __future__ import annotations

from .registry import PlaybackRegistry, PlaybackRun
from .scheduler import EmitSink, PlaybackOutcome, PlaybackScheduler, iter_cues

__all__ = [
    "EmitSink",
    "PlaybackOutcome",
    "PlaybackRegistry",
    "PlaybackRun",
    "PlaybackScheduler",
    "iter_cues",
]
