"""Validate a script file."""

import re
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from chatcinema.cli.commands.list import format_runtime
from chatcinema.cli.utils import handle_cli_error
from chatcinema.config import get_settings
from chatcinema.parser import ScriptParser

console = Console()

_EMPHASIS = re.compile(r"</?em>")


def check_command(
    script: Annotated[
        Path,
        typer.Argument(
            help="Script file to check",
            exists=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
) -> None:
    """Parse a script file and summarize its scenes."""
    try:
        parser = ScriptParser.from_settings(get_settings())
        movie = parser.parse_file(script)
    except Exception as e:
        handle_cli_error(e, verbose=True)
        return

    table = Table(title=movie.title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Scene", style="cyan", no_wrap=False)
    table.add_column("Actors", style="green")
    table.add_column("Lines", justify="right")
    table.add_column("Runtime", justify="right", style="yellow")

    for number, scene in enumerate(movie.scenes, start=1):
        table.add_row(
            str(number),
            escape(_EMPHASIS.sub("", scene.intro)),
            escape(", ".join(scene.actors)),
            str(len(scene.lines)),
            format_runtime(sum(line.delay for line in scene.lines)),
        )

    console.print(table)
    console.print(
        f"\n[green]✓ {len(movie.scenes)} scenes, {movie.line_count} lines, "
        f"{format_runtime(movie.runtime)} runtime[/green]"
    )
