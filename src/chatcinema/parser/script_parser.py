"""Movie script parser.

Scripts are line oriented. Each line is either a scene marker or a line of
dialogue, with the first colon separating the two fields::

    SCENE: A parking lot at 1:15 in the morning
    Doc: Marty! You made it!
    Marty: Yeah.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from chatcinema.config import get_logger
from chatcinema.exceptions import ParseError, ScriptLoadError, ScriptNotFoundError
from chatcinema.parser.colors import ColorPolicy, RandomColorPolicy, get_color_policy
from chatcinema.parser.models import Line, Movie, Scene
from chatcinema.utils.titles import movie_title

if TYPE_CHECKING:
    from chatcinema.config.settings import CinemaSettings

logger = get_logger(__name__)

SCENE_KEYWORD = "SCENE"
FIELD_SEPARATOR = ":"


def line_delay(text: str, words_per_second: int = 4, min_delay: int = 3) -> float:
    """Compute the pause that follows a line of dialogue.

    The word count is divided with truncation before the minimum is
    applied, so every line under ``words_per_second * (min_delay + 1)``
    words gets the minimum.

    Args:
        text: Dialogue text
        words_per_second: Reading speed
        min_delay: Minimum pause in seconds

    Returns:
        Delay in seconds
    """
    word_count = len(text.split())
    return float(max(word_count // words_per_second, min_delay))


class _SceneBuilder:
    """Mutable scene under construction."""

    def __init__(self, index: int, description: str) -> None:
        self.index = index
        self.intro = f"<em>{description}</em>"
        self.actors: dict[str, str] = {}
        self.lines: list[Line] = []

    def build(self) -> Scene:
        return Scene(
            intro=self.intro,
            actors=MappingProxyType(dict(self.actors)),
            lines=tuple(self.lines),
        )


class ScriptParser:
    """Parse movie scripts into playable Movie objects."""

    def __init__(
        self,
        color_policy: ColorPolicy | None = None,
        words_per_second: int = 4,
        min_delay: int = 3,
    ) -> None:
        """Initialize the parser.

        Args:
            color_policy: Assigns a color to an actor on first appearance
                in a scene. Defaults to a random policy.
            words_per_second: Reading speed used for line delays
            min_delay: Minimum pause after each line, in seconds
        """
        if words_per_second < 1:
            raise ValueError("words_per_second must be at least 1")
        self.color_policy = color_policy or RandomColorPolicy()
        self.words_per_second = words_per_second
        self.min_delay = min_delay

    @classmethod
    def from_settings(cls, settings: CinemaSettings) -> ScriptParser:
        """Create a parser configured from settings."""
        return cls(
            color_policy=get_color_policy(
                settings.color_policy, seed=settings.color_seed
            ),
            words_per_second=settings.words_per_second,
            min_delay=settings.min_line_delay,
        )

    def parse(
        self,
        lines: Iterable[str],
        title: str,
        identifier: str | None = None,
    ) -> Movie:
        """Parse script lines into a Movie.

        Args:
            lines: Script lines, with or without trailing newlines
            title: Display title for the movie
            identifier: Optional movie identifier

        Returns:
            Parsed Movie

        Raises:
            ParseError: If a line is malformed, dialogue appears before
                the first scene, or the script has no scenes
        """
        scenes: list[_SceneBuilder] = []

        for line_number, raw_line in enumerate(lines, start=1):
            line = raw_line.rstrip("\r\n")
            actor, text = self._split_line(line, line_number)

            if actor.upper() == SCENE_KEYWORD:
                scenes.append(_SceneBuilder(len(scenes), text))
                continue

            if not scenes:
                raise ParseError(
                    message="Dialogue found before the first scene",
                    hint=f"Start the script with a '{SCENE_KEYWORD}: ...' line",
                    details={"line_number": line_number, "line": line},
                )

            scene = scenes[-1]
            if actor not in scene.actors:
                scene.actors[actor] = self.color_policy(actor, scene.index)
            scene.lines.append(
                Line(
                    actor=actor,
                    text=text,
                    delay=line_delay(text, self.words_per_second, self.min_delay),
                )
            )

        if not scenes:
            raise ParseError(
                message="Script contains no scenes",
                hint=f"Add at least one '{SCENE_KEYWORD}: ...' line",
                details={"title": title},
            )

        movie = Movie(
            title=title,
            scenes=tuple(scene.build() for scene in scenes),
            identifier=identifier,
        )
        logger.debug(
            "Parsed movie script",
            title=title,
            scenes=len(movie.scenes),
            lines=movie.line_count,
        )
        return movie

    def parse_file(
        self,
        file_path: Path,
        title: str | None = None,
        identifier: str | None = None,
    ) -> Movie:
        """Parse a script file.

        Args:
            file_path: Path to the script, usually ``<movie>/script.txt``
            title: Display title; derived from the parent directory name
                when omitted
            identifier: Movie identifier; defaults to the parent directory
                name

        Returns:
            Parsed Movie

        Raises:
            ScriptNotFoundError: If the file does not exist
            ScriptLoadError: If the file cannot be read
            ParseError: If the script content is invalid
        """
        identifier = identifier or file_path.parent.name
        try:
            content = file_path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise ScriptNotFoundError(
                message=f"Script file not found: {file_path}",
                hint="Check the movie name and the movies directory",
                details={"file": str(file_path)},
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ScriptLoadError(
                message=f"Failed to read script file: {file_path}",
                hint="Scripts must be readable UTF-8 text files",
                details={"file": str(file_path), "error": str(e)},
            ) from e

        logger.debug("Parsing script file", file=str(file_path))
        return self.parse(
            content.splitlines(),
            title=title or movie_title(identifier),
            identifier=identifier,
        )

    def _split_line(self, line: str, line_number: int) -> tuple[str, str]:
        """Split a line into trimmed actor and text fields."""
        if not line.strip():
            raise ParseError(
                message=f"Blank line at line {line_number}",
                hint="Remove empty lines from the script",
                details={"line_number": line_number, "line": line},
            )

        actor, separator, text = line.partition(FIELD_SEPARATOR)
        if not separator:
            raise ParseError(
                message=f"Missing '{FIELD_SEPARATOR}' separator at line {line_number}",
                hint="Every line must look like 'Actor: text' or 'SCENE: text'",
                details={"line_number": line_number, "line": line},
            )

        actor = actor.strip()
        if not actor:
            raise ParseError(
                message=f"Missing actor name at line {line_number}",
                hint="Every line must look like 'Actor: text' or 'SCENE: text'",
                details={"line_number": line_number, "line": line},
            )
        return actor, text.strip()
