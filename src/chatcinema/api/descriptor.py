"""Atlassian Connect add-on descriptor."""

from __future__ import annotations

from typing import Any

from chatcinema.commands import WEBHOOK_PATTERN
from chatcinema.notify import SCOPE_SEND_NOTIFICATION


def build_descriptor(base_url: str, bot_name: str = "Hipchat Cinema") -> dict[str, Any]:
    """Build the descriptor HipChat reads when installing the add-on.

    Args:
        base_url: Public URL the app is served under
        bot_name: Display name of the add-on

    Returns:
        Descriptor document
    """
    base_url = base_url.rstrip("/")
    return {
        "key": "hipchat-cinema",
        "name": bot_name,
        "description": "Plays movie scripts into your room, one line at a time.",
        "vendor": {"name": bot_name, "url": base_url},
        "links": {
            "self": f"{base_url}/atlassian-connect.json",
            "homepage": base_url,
        },
        "apiVersion": "1.0",
        "capabilities": {
            "hipchatApiConsumer": {
                "scopes": [SCOPE_SEND_NOTIFICATION],
                "fromName": bot_name,
            },
            "installable": {
                "callbackUrl": f"{base_url}/installable",
                "allowGlobal": False,
                "allowRoom": True,
            },
            "webhook": [
                {
                    "url": f"{base_url}/hook",
                    "pattern": WEBHOOK_PATTERN,
                    "event": "room_message",
                    "name": "Cinema commands",
                }
            ],
        },
    }
