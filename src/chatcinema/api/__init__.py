"""Chat Cinema webhook API.

This module provides the HipChat add-on web application:
- create_app: FastAPI application factory
- Room, RoomRegistry: Rooms the add-on is installed in
- build_descriptor: The Atlassian Connect descriptor
"""

from chatcinema.api.app import create_app as create_app
from chatcinema.api.descriptor import build_descriptor as build_descriptor
from chatcinema.api.rooms import Room as Room
from chatcinema.api.rooms import RoomRegistry as RoomRegistry

__all__ = [
    "Room",
    "RoomRegistry",
    "build_descriptor",
    "create_app",
]
