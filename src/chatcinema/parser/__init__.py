"""Movie script parser for Chat Cinema."""

from __future__ import annotations

from .colors import ColorPolicy, HashedColorPolicy, RandomColorPolicy, get_color_policy
from .models import INTRO_COLOR, NARRATOR, PALETTE, Line, Movie, Scene
from .script_parser import ScriptParser, line_delay

__all__ = [
    "INTRO_COLOR",
    "NARRATOR",
    "PALETTE",
    "ColorPolicy",
    "HashedColorPolicy",
    "Line",
    "Movie",
    "RandomColorPolicy",
    "Scene",
    "ScriptParser",
    "get_color_policy",
    "line_delay",
]
