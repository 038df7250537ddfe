"""HipChat add-on endpoints: descriptor, installation and command webhook."""

from typing import Any

from fastapi import APIRouter, HTTPException, Request, Response

from chatcinema.api.descriptor import build_descriptor
from chatcinema.api.rooms import Room, RoomRegistry
from chatcinema.api.schemas import HookRequest, InstallRequest, ReplyResponse
from chatcinema.commands import CommandHandler
from chatcinema.config import CinemaSettings, get_logger
from chatcinema.exceptions import NotificationError
from chatcinema.notify import HipChatClient, RoomNotifier
from chatcinema.playback import PlaybackRegistry

logger = get_logger(__name__)
router = APIRouter()


@router.get("/")
@router.get("/atlassian-connect.json")
def atlassian_connect(request: Request) -> dict[str, Any]:
    """Serve the add-on descriptor."""
    settings: CinemaSettings = request.app.state.settings
    return build_descriptor(settings.base_url, bot_name=settings.bot_name)


@router.post("/installable")
def install(payload: InstallRequest, request: Request) -> list[str]:
    """Register a room the add-on was just installed in."""
    state = request.app.state
    client: HipChatClient = state.client
    rooms: RoomRegistry = state.rooms

    logger.info("Received install request", client_id=payload.oauth_id)

    try:
        token = client.generate_token(payload.oauth_id, payload.oauth_secret)
    except NotificationError as e:
        logger.error(
            "Failed to generate access token",
            client_id=payload.oauth_id,
            error=e.message,
            details=e.details,
        )
        raise HTTPException(status_code=502, detail=e.message) from e

    notifier = RoomNotifier(
        client,
        payload.room_id,
        token,
        bot_name=state.settings.bot_name,
        credentials=(payload.oauth_id, payload.oauth_secret),
    )
    rooms.add(
        Room(client_id=payload.oauth_id, room_id=payload.room_id, notifier=notifier)
    )
    return ["OK"]


@router.delete("/installable/{client_id}", status_code=204)
def uninstall(client_id: str, request: Request) -> Response:
    """Forget a room the add-on was removed from."""
    rooms: RoomRegistry = request.app.state.rooms
    registry: PlaybackRegistry = request.app.state.registry

    logger.info("Received uninstall request", client_id=client_id)

    room = rooms.remove(client_id)
    if room is not None:
        registry.stop(room.room_id)
    return Response(status_code=204)


@router.post("/hook", response_model=None)
def hook(payload: HookRequest, request: Request) -> ReplyResponse | Response:
    """Handle a /play or /stop message typed in a room."""
    rooms: RoomRegistry = request.app.state.rooms
    handler: CommandHandler = request.app.state.handler

    room = rooms.get(payload.oauth_client_id)
    if room is None:
        logger.warning("Client id is not registered", client_id=payload.oauth_client_id)
        return Response(status_code=204)

    reply = handler.handle(
        room.room_id, payload.text, room.notifier.act, respond=room.respond
    )
    return ReplyResponse(message=reply.message, color=reply.color)


@router.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
