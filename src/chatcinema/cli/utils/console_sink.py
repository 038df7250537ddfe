"""Render movie lines to the terminal."""

from __future__ import annotations

import re
import threading

from rich.console import Console
from rich.markup import escape

from chatcinema.parser.models import Line, Scene

# Palette tokens mapped to rich color names
RICH_COLORS = {
    "gray": "grey62",
    "green": "green",
    "purple": "magenta",
    "red": "red",
    "yellow": "yellow",
}

_EMPHASIS = re.compile(r"</?em>")


def rich_color(color: str) -> str:
    """Map a palette color token to a rich color name."""
    return RICH_COLORS.get(color, "default")


class ConsoleSink:
    """Emit sink that prints each line as ``Actor: text``."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.count = 0
        self._lock = threading.Lock()

    def __call__(self, scene: Scene, line: Line) -> None:
        with self._lock:
            self.count += 1
            if line.is_intro:
                text = escape(_EMPHASIS.sub("", line.text))
                self.console.print(f"\n[italic]{text}[/italic]")
                return
            style = rich_color(scene.color_of(line))
            self.console.print(
                f"[bold {style}]{escape(line.actor)}:[/] {escape(line.text)}"
            )
