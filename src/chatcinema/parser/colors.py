"""Actor color assignment policies."""

from __future__ import annotations

import hashlib
import random
from collections.abc import Callable, Sequence

from chatcinema.exceptions import ConfigurationError
from chatcinema.parser.models import PALETTE

# (actor name, scene index) -> color token
ColorPolicy = Callable[[str, int], str]


class RandomColorPolicy:
    """Pick a color uniformly at random from the palette."""

    def __init__(
        self, palette: Sequence[str] = PALETTE, seed: int | None = None
    ) -> None:
        """Initialize the policy.

        Args:
            palette: Colors to choose from
            seed: Optional seed for reproducible assignments
        """
        if not palette:
            raise ConfigurationError(message="Color palette cannot be empty")
        self.palette = tuple(palette)
        self._random = random.Random(seed)

    def __call__(self, actor: str, scene_index: int) -> str:
        return self._random.choice(self.palette)


class HashedColorPolicy:
    """Derive the color from a hash of the scene index and actor name."""

    def __init__(self, palette: Sequence[str] = PALETTE) -> None:
        if not palette:
            raise ConfigurationError(message="Color palette cannot be empty")
        self.palette = tuple(palette)

    def __call__(self, actor: str, scene_index: int) -> str:
        digest = hashlib.sha1(
            f"{scene_index}:{actor}".encode(), usedforsecurity=False
        ).digest()
        return self.palette[int.from_bytes(digest[:4], "big") % len(self.palette)]


def get_color_policy(name: str, seed: int | None = None) -> ColorPolicy:
    """Build a color policy by name.

    Args:
        name: Policy name, ``random`` or ``hashed``
        seed: Seed for the random policy

    Returns:
        The color policy

    Raises:
        ConfigurationError: If the policy name is unknown
    """
    normalized = name.strip().lower()
    if normalized == "random":
        return RandomColorPolicy(seed=seed)
    if normalized == "hashed":
        return HashedColorPolicy()
    raise ConfigurationError(
        message=f"Unknown color policy '{name}'",
        hint="Use 'random' or 'hashed'",
        details={"color_policy": name},
    )
