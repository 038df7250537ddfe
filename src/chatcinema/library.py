"""Movie library: locating, reading and parsing movie scripts."""

from __future__ import annotations

from pathlib import Path

from chatcinema.config import CinemaSettings, get_logger
from chatcinema.exceptions import (
    ScriptLoadError,
    ScriptNotFoundError,
    UnknownMovieError,
)
from chatcinema.parser import Movie, ScriptParser
from chatcinema.utils.titles import movie_title

logger = get_logger(__name__)

SCRIPT_FILENAME = "script.txt"


class MovieLibrary:
    """Movies stored as ``<movies_dir>/<identifier>/script.txt``."""

    def __init__(
        self,
        movies_dir: Path,
        allowed: list[str] | None = None,
        parser: ScriptParser | None = None,
    ) -> None:
        """Initialize the library.

        Args:
            movies_dir: Directory holding one subdirectory per movie
            allowed: Identifiers that may be played; every movie found in
                ``movies_dir`` when None
            parser: Parser used to load scripts
        """
        self.movies_dir = Path(movies_dir)
        self.allowed = list(allowed) if allowed is not None else None
        self.parser = parser or ScriptParser()

    @classmethod
    def from_settings(cls, settings: CinemaSettings) -> MovieLibrary:
        """Create a library configured from settings."""
        return cls(
            movies_dir=settings.movies_dir,
            allowed=settings.allowed_movies,
            parser=ScriptParser.from_settings(settings),
        )

    def available(self) -> list[str]:
        """List the identifiers that may be played, sorted."""
        if self.allowed is not None:
            return sorted(set(self.allowed))
        if not self.movies_dir.is_dir():
            logger.warning("Movies directory not found", path=str(self.movies_dir))
            return []
        return sorted(
            entry.name
            for entry in self.movies_dir.iterdir()
            if entry.is_dir() and (entry / SCRIPT_FILENAME).is_file()
        )

    def is_allowed(self, identifier: str) -> bool:
        """Check whether a movie may be played."""
        return identifier in self.available()

    def script_path(self, identifier: str) -> Path:
        """Get the script file path for a movie.

        Raises:
            UnknownMovieError: If the identifier is not a plain name
        """
        if not identifier or "/" in identifier or "\\" in identifier or (
            identifier in {".", ".."}
        ):
            raise UnknownMovieError(identifier, self.available())
        return self.movies_dir / identifier / SCRIPT_FILENAME

    def read_lines(self, identifier: str) -> list[str]:
        """Read a movie's script lines.

        Raises:
            ScriptNotFoundError: If the script file does not exist
            ScriptLoadError: If the script file cannot be read
        """
        path = self.script_path(identifier)
        try:
            return path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError as e:
            raise ScriptNotFoundError(
                message=f"No script found for movie '{identifier}'",
                hint=f"Expected {SCRIPT_FILENAME} in {path.parent}",
                details={"movie": identifier, "file": str(path)},
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ScriptLoadError(
                message=f"Failed to read script for movie '{identifier}'",
                hint="Scripts must be readable UTF-8 text files",
                details={"movie": identifier, "file": str(path), "error": str(e)},
            ) from e

    def load(self, identifier: str) -> Movie:
        """Load and parse a movie.

        Args:
            identifier: Movie identifier

        Returns:
            Parsed Movie

        Raises:
            UnknownMovieError: If the movie is not allowed
            ScriptLoadError: If the script cannot be read
            ParseError: If the script is invalid
        """
        if not self.is_allowed(identifier):
            raise UnknownMovieError(identifier, self.available())

        lines = self.read_lines(identifier)
        movie = self.parser.parse(
            lines, title=movie_title(identifier), identifier=identifier
        )
        logger.info(
            "Loaded movie",
            movie=identifier,
            title=movie.title,
            scenes=len(movie.scenes),
            lines=movie.line_count,
        )
        return movie
