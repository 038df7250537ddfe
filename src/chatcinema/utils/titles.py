"""Movie title helpers."""

from __future__ import annotations

import re

SMALL_WORDS = frozenset({"a", "an", "on", "the", "to"})

_WORD_SEPARATORS = re.compile(r"[\s_\-]+")


def movie_title(identifier: str) -> str:
    """Turn a movie identifier into a display title.

    Every word is capitalized except the small words, which stay as
    written unless they open the title.

    Args:
        identifier: Movie identifier such as ``back_to_the_future``

    Returns:
        Display title such as ``Back to the Future``
    """
    words = [word for word in _WORD_SEPARATORS.split(identifier) if word]
    titled = []
    for index, word in enumerate(words):
        if index > 0 and word in SMALL_WORDS:
            titled.append(word)
        else:
            titled.append(word[:1].upper() + word[1:])
    return " ".join(titled)
