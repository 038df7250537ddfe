"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from chatcinema import __version__
from chatcinema.api.rooms import RoomRegistry
from chatcinema.api.routes import router
from chatcinema.commands import CommandHandler
from chatcinema.config import CinemaSettings, get_logger, get_settings
from chatcinema.library import MovieLibrary
from chatcinema.notify import HipChatClient
from chatcinema.playback import PlaybackRegistry, PlaybackScheduler

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info(
        "Starting Chat Cinema",
        version=__version__,
        base_url=app.state.settings.base_url,
    )

    yield

    logger.info("Shutting down Chat Cinema")
    app.state.registry.stop_all()
    app.state.client.close()


def create_app(
    settings: CinemaSettings | None = None,
    client: HipChatClient | None = None,
) -> FastAPI:
    """Create and configure the webhook application.

    Args:
        settings: Settings to use instead of the global ones
        client: HipChat client to use instead of one built from settings

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Chat Cinema",
        description="Plays movie scripts into chat rooms",
        version=__version__,
        lifespan=lifespan,
    )

    registry = PlaybackRegistry(PlaybackScheduler(speed=settings.playback_speed))
    app.state.settings = settings
    app.state.client = client or HipChatClient.from_settings(settings)
    app.state.rooms = RoomRegistry()
    app.state.registry = registry
    app.state.library = MovieLibrary.from_settings(settings)
    app.state.handler = CommandHandler(app.state.library, registry)

    app.include_router(router)

    return app
