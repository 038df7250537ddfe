"""Chat Cinema utilities module."""

from chatcinema.utils.titles import SMALL_WORDS, movie_title

__all__ = ["SMALL_WORDS", "movie_title"]
