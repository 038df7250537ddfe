"""Global CLI options shared through the typer context."""

import typer


def verbose_from_context(ctx: typer.Context | None) -> bool:
    """Check whether --verbose or --debug was given.

    Args:
        ctx: Typer context object

    Returns:
        True if the main callback recorded a verbose flag
    """
    if ctx and ctx.obj and isinstance(ctx.obj, dict):
        return bool(ctx.obj.get("verbose", False))
    return False
