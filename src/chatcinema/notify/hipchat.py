"""HipChat v2 REST API client for room notifications."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from chatcinema.config import CinemaSettings, get_logger
from chatcinema.exceptions import (
    AuthorizationError,
    NotificationError,
    PlaybackAbortedError,
)
from chatcinema.parser.models import Line, Scene

logger = get_logger(__name__)

SCOPE_SEND_NOTIFICATION = "send_notification"

REPLY_COLOR = "green"
ERROR_COLOR = "red"


@dataclass
class AccessToken:
    """OAuth access token issued for an installed add-on."""

    access_token: str
    expires_in: int = 0
    scope: str = ""
    token_type: str = "bearer"
    issued_at: float = field(default_factory=time.monotonic)

    @property
    def is_expired(self) -> bool:
        """Whether the token has passed its lifetime."""
        if self.expires_in <= 0:
            return False
        return time.monotonic() - self.issued_at >= self.expires_in


class HipChatClient:
    """Thin synchronous client for the HipChat v2 API."""

    def __init__(
        self,
        base_url: str = "https://api.hipchat.com/v2",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL
            timeout: HTTP request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.base_url = base_url.rstrip("/")
        self.client = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: CinemaSettings) -> HipChatClient:
        """Create a client configured from settings."""
        return cls(base_url=settings.hipchat_api_url, timeout=settings.notify_timeout)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()

    def generate_token(
        self,
        client_id: str,
        client_secret: str,
        scopes: tuple[str, ...] = (SCOPE_SEND_NOTIFICATION,),
    ) -> AccessToken:
        """Exchange add-on credentials for an access token.

        Raises:
            NotificationError: If the token request fails
        """
        data = self._request(
            "POST",
            "/oauth/token",
            auth=(client_id, client_secret),
            data={"grant_type": "client_credentials", "scope": " ".join(scopes)},
        )
        try:
            return AccessToken(
                access_token=data["access_token"],
                expires_in=int(data.get("expires_in", 0)),
                scope=data.get("scope", ""),
                token_type=data.get("token_type", "bearer"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise NotificationError(
                message="Invalid token response from HipChat",
                details={"client_id": client_id, "error": str(e)},
            ) from e

    def send_notification(
        self,
        room: str,
        token: AccessToken,
        message: str,
        color: str = "gray",
        sender: str | None = None,
        message_format: str = "html",
        notify: bool = False,
    ) -> None:
        """Send a notification message to a room.

        Raises:
            NotificationError: If the request fails
        """
        payload: dict[str, Any] = {
            "message": message,
            "message_format": message_format,
            "color": color,
            "notify": notify,
        }
        if sender:
            payload["from"] = sender
        self._request(
            "POST",
            f"/room/{room}/notification",
            headers={"Authorization": f"Bearer {token.access_token}"},
            json=payload,
        )

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NotificationError(
                message=f"HipChat API returned {e.response.status_code}",
                hint="Check the add-on installation and its credentials",
                details={
                    "path": path,
                    "status_code": e.response.status_code,
                    "body": e.response.text[:200],
                },
            ) from e
        except httpx.HTTPError as e:
            raise NotificationError(
                message="HipChat API request failed",
                hint="Check network connectivity to the HipChat server",
                details={"path": path, "error": str(e), "error_type": type(e).__name__},
            ) from e

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}


class RoomNotifier:
    """Sends movie lines and bot replies to one room.

    The access token is renewed with the add-on credentials once it
    expires or HipChat rejects it with a 401.
    """

    def __init__(
        self,
        client: HipChatClient,
        room: str,
        token: AccessToken,
        bot_name: str = "Hipchat Cinema",
        credentials: tuple[str, str] | None = None,
    ) -> None:
        self.client = client
        self.room = room
        self.token = token
        self.bot_name = bot_name
        self.credentials = credentials
        self._lock = threading.Lock()

    def access_token(self) -> AccessToken:
        """Get a usable token, renewing it first if it has expired."""
        with self._lock:
            if self.token.is_expired:
                self._renew(self.token)
            return self.token

    def act(self, scene: Scene, line: Line) -> None:
        """Send one movie line, attributed to its actor.

        Raises:
            PlaybackAbortedError: If the room can no longer be notified
        """
        try:
            self._send(
                message=line.text, color=scene.color_of(line), sender=line.actor
            )
        except AuthorizationError as e:
            raise PlaybackAbortedError(
                message="Lost access to the room",
                hint=e.hint,
                details={"room": self.room, "error": e.message},
            ) from e

    def reply(self, message: str, color: str = REPLY_COLOR) -> None:
        """Send a bot reply to the room."""
        self._send(message=message, color=color, sender=self.bot_name)

    def reply_error(self, message: str) -> None:
        """Send a bot error reply to the room."""
        self.reply(message, color=ERROR_COLOR)

    def _send(self, **kwargs: Any) -> None:
        token = self.access_token()
        try:
            self.client.send_notification(self.room, token, **kwargs)
            return
        except NotificationError as e:
            if not _is_unauthorized(e):
                raise
            logger.info("Access token rejected, renewing", room=self.room)

        with self._lock:
            self._renew(token)
            token = self.token
        try:
            self.client.send_notification(self.room, token, **kwargs)
        except NotificationError as e:
            if _is_unauthorized(e):
                raise AuthorizationError(
                    message="Renewed access token was rejected",
                    hint="Reinstall the add-on in the room",
                    details={"room": self.room},
                ) from e
            raise

    def _renew(self, stale: AccessToken) -> None:
        # Another thread may have renewed it already
        if self.token is not stale:
            return
        if self.credentials is None:
            raise AuthorizationError(
                message="Access token cannot be renewed without add-on credentials",
                hint="Reinstall the add-on in the room",
                details={"room": self.room},
            )
        try:
            self.token = self.client.generate_token(*self.credentials)
        except NotificationError as e:
            raise AuthorizationError(
                message="Failed to renew access token",
                hint=e.hint,
                details={"room": self.room, "error": e.message},
            ) from e
        logger.info("Renewed access token", room=self.room)


def _is_unauthorized(error: NotificationError) -> bool:
    return (error.details or {}).get("status_code") == 401
