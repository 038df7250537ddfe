"""Data models for parsed movie scripts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

PALETTE: tuple[str, ...] = ("gray", "green", "purple", "red", "yellow")

NARRATOR = "Narrator"
INTRO_COLOR = "gray"


@dataclass(frozen=True)
class Line:
    """One spoken line and the pause that follows it."""

    actor: str
    text: str
    delay: float = 0.0
    is_intro: bool = False


@dataclass(frozen=True)
class Scene:
    """Represents a scene: an intro, its cast colors and its dialogue."""

    intro: str
    actors: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    lines: tuple[Line, ...] = ()

    @property
    def intro_line(self) -> Line:
        """The scene intro as a narrator line with no pause."""
        return Line(actor=NARRATOR, text=self.intro, delay=0.0, is_intro=True)

    def color_for(self, actor: str) -> str:
        """Get the color assigned to an actor in this scene.

        Args:
            actor: Actor name

        Returns:
            The actor's color, or the intro color for actors not in this
            scene.
        """
        return self.actors.get(actor, INTRO_COLOR)

    def color_of(self, line: Line) -> str:
        """Get the color a line is shown in; intros always use INTRO_COLOR."""
        if line.is_intro:
            return INTRO_COLOR
        return self.color_for(line.actor)


@dataclass(frozen=True)
class Movie:
    """Represents a parsed, playable movie."""

    title: str
    scenes: tuple[Scene, ...]
    identifier: str | None = None

    @property
    def line_count(self) -> int:
        """Number of dialogue lines across all scenes."""
        return sum(len(scene.lines) for scene in self.scenes)

    @property
    def runtime(self) -> float:
        """Total playback time in seconds at normal speed."""
        return sum(line.delay for scene in self.scenes for line in scene.lines)
