"""List the movies in the library."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from chatcinema.cli.utils import handle_cli_error, verbose_from_context
from chatcinema.config import get_settings_for_cli
from chatcinema.exceptions import CinemaError
from chatcinema.library import MovieLibrary

console = Console()


def format_runtime(seconds: float) -> str:
    """Format seconds as ``m:ss``."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


def list_command(
    ctx: typer.Context,
    movies_dir: Annotated[
        Path | None,
        typer.Option(
            "--movies-dir",
            "-d",
            help="Directory holding <movie>/script.txt files",
            file_okay=False,
        ),
    ] = None,
) -> None:
    """List the movies that can be played.

    Each movie is parsed so broken scripts show up here before anyone
    tries to play them.
    """
    try:
        settings = get_settings_for_cli(cli_overrides={"movies_dir": movies_dir})
        library = MovieLibrary.from_settings(settings)
        identifiers = library.available()
    except Exception as e:
        handle_cli_error(e, verbose=verbose_from_context(ctx))
        return

    if not identifiers:
        console.print(
            f"[yellow]No movies found in {library.movies_dir}[/yellow]",
            style="bold",
        )
        return

    table = Table(title="Movies", show_lines=False)
    table.add_column("Movie", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Scenes", justify="right")
    table.add_column("Lines", justify="right")
    table.add_column("Runtime", justify="right", style="yellow")

    broken = 0
    for identifier in identifiers:
        try:
            movie = library.load(identifier)
        except CinemaError as e:
            broken += 1
            table.add_row(
                escape(identifier), f"[red]{escape(e.message)}[/red]", "-", "-", "-"
            )
            continue
        table.add_row(
            escape(identifier),
            escape(movie.title),
            str(len(movie.scenes)),
            str(movie.line_count),
            format_runtime(movie.runtime),
        )

    console.print(table)
    console.print(
        f"\n[green]Found {len(identifiers)} "
        f"movie{'s' if len(identifiers) != 1 else ''}[/green]"
    )
    if broken:
        console.print(f"[red]{broken} could not be loaded[/red]")
