"""Chat Cinema configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Annotated, Any, cast

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from chatcinema.exceptions import ConfigurationError, check_config_keys


class CinemaSettings(BaseSettings):
    """Chat Cinema configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. CLI arguments (when provided via command flags)
       Example: cinema play hackers --movies-dir ./movies

    2. Config file values (YAML, TOML, or JSON)
       Example: cinema --config cinema.yaml
       Multiple files: Later files override earlier ones

    3. Environment variables (prefixed with CINEMA_)
       Example: export CINEMA_BASE_URL=https://cinema.example.com

    4. .env file (in current directory or specified path)

    5. Default values (defined in field declarations below)
    """

    model_config = SettingsConfigDict(
        env_prefix="CINEMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Movie library settings
    movies_dir: Path = Field(
        default_factory=lambda: Path.cwd() / "movies",
        description="Directory holding <movie>/script.txt files",
    )
    allowed_movies: Annotated[list[str] | None, NoDecode] = Field(
        default=None,
        description=(
            "Movie identifiers that may be played "
            "(unset = every movie found in movies_dir)"
        ),
    )

    # Timing settings
    min_line_delay: int = Field(
        default=3,
        description="Minimum pause after a dialogue line, in seconds",
        ge=0,
    )
    words_per_second: int = Field(
        default=4,
        description="Words read per second when deriving line delays",
        ge=1,
    )
    playback_speed: float = Field(
        default=1.0,
        description="Playback speed multiplier (2.0 = delays halved)",
        gt=0.0,
    )

    # Color settings
    color_policy: str = Field(
        default="random",
        description="Actor color assignment policy (random, hashed)",
        pattern="^(?i)(random|hashed)$",
    )
    color_seed: int | None = Field(
        default=None,
        description="Seed for the random color policy",
    )

    # Chat settings
    bot_name: str = Field(
        default="Hipchat Cinema",
        description="Sender name used for bot replies",
    )
    hipchat_api_url: str = Field(
        default="https://api.hipchat.com/v2",
        description="HipChat REST API base URL",
    )
    notify_timeout: float = Field(
        default=10.0,
        description="HTTP timeout for chat notifications in seconds",
        gt=0.0,
    )

    # Web server settings
    base_url: str = Field(
        default="http://localhost:8080",
        description="Public base URL the webhook app is served under",
    )
    host: str = Field(
        default="127.0.0.1",
        description="Web server bind address",
    )
    port: int = Field(
        default=8080,
        description="Web server port",
        ge=1,
        le=65535,
    )

    # Debug settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(?i)(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(?i)(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("movies_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and ~, then resolve the path."""
        if v is None:
            return None
        if isinstance(v, str):
            expanded = os.path.expandvars(v)
            return Path(expanded).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(
            f"Path fields must be string or Path, got {type(v).__name__}: {v!r}"
        )

    @field_validator("allowed_movies", mode="before")
    @classmethod
    def split_allowed_movies(cls, v: Any) -> Any:
        """Accept a comma separated string as well as a list."""
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", "color_policy", mode="before")
    @classmethod
    def normalize_lowercase(cls, v: Any) -> str:
        """Normalize choice fields to lowercase."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"Expected a string, got {type(v).__name__}")

    @classmethod
    def from_file(cls, config_path: Path | str) -> CinemaSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If file format is not supported.
            FileNotFoundError: If config file doesn't exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                    "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                },
            )

        check_config_keys(data)

        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        env_file: Path | str | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> CinemaSettings:
        """Load settings with proper precedence from multiple sources.

        Args:
            config_files: Config files to load (later files override earlier).
            env_file: Path to .env file (default: .env in current directory).
            cli_args: Dictionary of CLI arguments; None values are ignored.

        Returns:
            Merged settings from all sources.
        """
        data: dict[str, Any] = {}

        if config_files:
            for config_file in config_files:
                try:
                    file_settings = cls.from_file(config_file)
                except FileNotFoundError:
                    from chatcinema.config.logging import get_logger as _get_logger

                    logger = _get_logger("chatcinema.config.settings")
                    logger.warning(
                        "Configuration file not found, using defaults",
                        config_file=str(config_file),
                    )
                    continue
                data.update(file_settings.model_dump(exclude_unset=True))

        if env_file:
            settings = cast(
                "CinemaSettings", cast(Any, cls)(_env_file=env_file, **data)
            )
        else:
            settings = cls(**data)

        if cli_args:
            cli_data = {k: v for k, v in cli_args.items() if v is not None}
            if cli_data:
                updated_data = settings.model_dump()
                updated_data.update(cli_data)
                settings = cls(**updated_data)

        return settings


# Global settings instance
_settings: CinemaSettings | None = None


def _get_config_paths() -> list[Path | str]:
    """Get the existing config files, lowest priority first."""
    potential_paths = [
        Path.home() / ".config" / "chatcinema" / "config.yaml",
        Path.home() / ".config" / "chatcinema" / "config.toml",
        Path.cwd() / "cinema.yaml",
        Path.cwd() / "cinema.json",
        Path.cwd() / "cinema.toml",
    ]

    existing_paths: list[Path | str] = []
    for path in potential_paths:
        try:
            if path.is_file():
                existing_paths.append(path)
        except OSError:
            continue
    return existing_paths


def get_settings() -> CinemaSettings:
    """Get the global settings instance.

    Returns:
        Global CinemaSettings instance, loaded on first use.
    """
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = CinemaSettings.from_multiple_sources(config_files=config_paths)
        else:
            _settings = CinemaSettings()
    return _settings


def set_settings(settings: CinemaSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Clear the global settings cache.

    Forces get_settings() to re-read environment variables and config
    files on the next call.
    """
    global _settings
    _settings = None


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> CinemaSettings:
    """Get settings for CLI commands with consistent precedence.

    Args:
        config_file: Optional specific config file to load.
        cli_overrides: CLI argument overrides; only non-None values apply.

    Returns:
        CinemaSettings instance with all sources merged.

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist.
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        return CinemaSettings.from_multiple_sources(
            config_files=[config_file],
            cli_args=cli_overrides,
        )

    settings = get_settings()
    if cli_overrides:
        filtered_overrides = {k: v for k, v in cli_overrides.items() if v is not None}
        if filtered_overrides:
            data = settings.model_dump()
            data.update(filtered_overrides)
            settings = CinemaSettings(**data)
    return settings
