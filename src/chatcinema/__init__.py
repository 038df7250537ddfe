"""Chat Cinema: movie scripts performed line by line in a chat room.

Scripts are parsed into scenes of timed, color coded lines and played back
into a room, one line at a time, until the movie ends or someone types
``/stop``.
"""

from chatcinema.exceptions import CinemaError, ParseError, ScriptLoadError
from chatcinema.parser import Line, Movie, Scene, ScriptParser
from chatcinema.playback import PlaybackOutcome, PlaybackRegistry, PlaybackScheduler

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "CinemaError",
    "Line",
    "Movie",
    "ParseError",
    "PlaybackOutcome",
    "PlaybackRegistry",
    "PlaybackScheduler",
    "Scene",
    "ScriptLoadError",
    "ScriptParser",
    "__version__",
]
