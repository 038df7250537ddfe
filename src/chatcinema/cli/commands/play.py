"""Play a movie into the terminal."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from chatcinema.cli.utils import ConsoleSink, handle_cli_error, verbose_from_context
from chatcinema.config import get_logger, get_settings_for_cli
from chatcinema.library import MovieLibrary
from chatcinema.playback import PlaybackOutcome, PlaybackRegistry, PlaybackScheduler

logger = get_logger(__name__)
console = Console()

CONSOLE_TARGET = "console"


def play_command(
    ctx: typer.Context,
    movie: Annotated[str, typer.Argument(help="Movie identifier, e.g. hackers")],
    movies_dir: Annotated[
        Path | None,
        typer.Option(
            "--movies-dir",
            "-d",
            help="Directory holding <movie>/script.txt files",
            file_okay=False,
        ),
    ] = None,
    speed: Annotated[
        float | None,
        typer.Option("--speed", "-s", help="Playback speed multiplier", min=0.01),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Seed for actor colors"),
    ] = None,
) -> None:
    """Play a movie line by line in the terminal.

    Press Ctrl-C to stop the movie.
    """
    try:
        settings = get_settings_for_cli(
            cli_overrides={
                "movies_dir": movies_dir,
                "playback_speed": speed,
                "color_seed": seed,
            }
        )
        library = MovieLibrary.from_settings(settings)
        loaded = library.load(movie)
    except Exception as e:
        handle_cli_error(e, verbose=verbose_from_context(ctx))
        return

    console.print(f'[green]Got it, now playing "{escape(loaded.title)}"[/green]')

    sink = ConsoleSink(console)
    registry = PlaybackRegistry(PlaybackScheduler(speed=settings.playback_speed))
    run = registry.start(CONSOLE_TARGET, loaded, sink)

    try:
        while run.is_running:
            run.join(timeout=0.25)
    except KeyboardInterrupt:
        registry.stop(CONSOLE_TARGET)
        run.join()

    if run.outcome == PlaybackOutcome.COMPLETED:
        console.print(f"\n[green]The End.[/green] [dim]{sink.count} lines[/dim]")
        return

    console.print("\n[yellow]Movie stopped[/yellow]")
    logger.info("Console playback ended early", outcome=str(run.outcome))
    raise typer.Exit(130 if run.outcome == PlaybackOutcome.STOPPED else 1)
