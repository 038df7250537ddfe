"""Custom exception hierarchy for Chat Cinema with helpful error messages."""

from __future__ import annotations

from typing import Any


class CinemaError(Exception):
    """Base exception with helpful formatting for all Chat Cinema errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(CinemaError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class ScriptLoadError(CinemaError):
    """Script source could not be read."""

    pass


class ScriptNotFoundError(ScriptLoadError):
    """Script file does not exist for the requested movie."""

    pass


class ParseError(CinemaError):
    """Script parsing errors including malformed lines and missing scenes."""

    pass


class UnknownMovieError(CinemaError):
    """Requested movie is not on the allow-list."""

    def __init__(self, identifier: str, allowed: list[str]) -> None:
        """Initialize with the rejected identifier and the allowed set.

        Args:
            identifier: Movie identifier that was requested
            allowed: Identifiers that may be played
        """
        self.identifier = identifier
        self.allowed = list(allowed)
        super().__init__(
            message=f"Unknown movie '{identifier}'",
            hint=f"Allowed movies are {', '.join(self.allowed) or 'none'}",
            details={"identifier": identifier, "allowed": self.allowed},
        )


class PlaybackPolicyError(CinemaError):
    """Request rejected because of the target's playback state."""

    pass


class AlreadyPlayingError(PlaybackPolicyError):
    """A movie is already playing for the target."""

    def __init__(self, target: str, title: str | None = None) -> None:
        """Initialize already-playing error.

        Args:
            target: Playback target (room) that is busy
            title: Title of the movie currently playing
        """
        self.target = target
        self.title = title
        details: dict[str, Any] = {"target": target}
        if title:
            details["now_playing"] = title
        super().__init__(
            message="Movie is already playing!",
            hint="Stop the current movie before starting another one",
            details=details,
        )


class NotificationError(CinemaError):
    """Chat notification transport errors."""

    pass


class AuthorizationError(NotificationError):
    """The room's access token was rejected and could not be renewed."""

    pass


class PlaybackAbortedError(CinemaError):
    """Raised by an emit sink to end playback early."""

    pass


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "movies_path": "movies_dir",
        "movie_dir": "movies_dir",
        "allowed": "allowed_movies",
        "speed": "playback_speed",
        "baseURL": "base_url",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
