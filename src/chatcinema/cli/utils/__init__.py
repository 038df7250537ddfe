"""CLI helpers."""

from chatcinema.cli.utils.console_sink import ConsoleSink, rich_color
from chatcinema.cli.utils.context import verbose_from_context
from chatcinema.cli.utils.error_handler import handle_cli_error

__all__ = ["ConsoleSink", "handle_cli_error", "rich_color", "verbose_from_context"]
