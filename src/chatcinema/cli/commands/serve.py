"""Run the HipChat webhook server."""

from typing import Annotated

import typer
import uvicorn
from rich.console import Console

from chatcinema.cli.utils import handle_cli_error, verbose_from_context
from chatcinema.config import get_settings_for_cli

console = Console()


def serve_command(
    ctx: typer.Context,
    host: Annotated[
        str | None, typer.Option("--host", "-h", help="Bind address")
    ] = None,
    port: Annotated[
        int | None, typer.Option("--port", "-p", help="Web server port")
    ] = None,
    base_url: Annotated[
        str | None,
        typer.Option(
            "--base-url",
            help="Public URL of this server",
            envvar="BASE_URL",
        ),
    ] = None,
) -> None:
    """Start the webhook server that plays movies into HipChat rooms."""
    from chatcinema import __version__
    from chatcinema.api.app import create_app

    try:
        settings = get_settings_for_cli(
            cli_overrides={"host": host, "port": port, "base_url": base_url}
        )
        app = create_app(settings)
    except Exception as e:
        handle_cli_error(e, verbose=verbose_from_context(ctx))
        return

    console.print(
        f"[blue]Hipchat Cinema v{__version__} - "
        f"listening on {settings.host}:{settings.port}[/blue]"
    )
    console.print(f"[dim]Descriptor: {settings.base_url}/atlassian-connect.json[/dim]")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "warning",
    )
