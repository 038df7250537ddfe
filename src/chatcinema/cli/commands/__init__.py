"""Chat Cinema CLI commands."""

from __future__ import annotations

from chatcinema.cli.commands.check import check_command
from chatcinema.cli.commands.list import list_command
from chatcinema.cli.commands.play import play_command
from chatcinema.cli.commands.serve import serve_command

__all__ = [
    "check_command",
    "list_command",
    "play_command",
    "serve_command",
]
