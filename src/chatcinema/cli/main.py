"""Main CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from chatcinema import __version__
from chatcinema.cli.commands import (
    check_command,
    list_command,
    play_command,
    serve_command,
)
from chatcinema.cli.utils import handle_cli_error
from chatcinema.config import (
    CinemaSettings,
    configure_logging,
    get_logger,
    get_settings,
    set_settings,
)

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="cinema",
    help="Play movie scripts line by line, in the terminal or in HipChat rooms",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="play")(play_command)
app.command(name="list")(list_command)
app.command(name="ls")(list_command)  # Alias for list command
app.command(name="check")(check_command)
app.command(name="serve")(serve_command)


@app.command()
def version() -> None:
    """Show the Chat Cinema version."""
    console.print(f"Chat Cinema v{__version__}")


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML, or JSON)",
            envvar="CINEMA_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging", envvar="CINEMA_DEBUG"),
    ] = False,
) -> None:
    """Configure global options."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose or debug

    if config:
        try:
            set_settings(CinemaSettings.from_multiple_sources(config_files=[config]))
        except Exception as e:
            handle_cli_error(e, verbose=verbose or debug)

    if debug:
        settings = get_settings().model_copy(
            update={"log_level": "DEBUG", "debug": True}
        )
        set_settings(settings)
        configure_logging(settings)
        logger.debug("Debug mode enabled")
    elif verbose:
        settings = get_settings().model_copy(update={"log_level": "INFO"})
        set_settings(settings)
        configure_logging(settings)
        logger.info("Verbose mode enabled")


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
