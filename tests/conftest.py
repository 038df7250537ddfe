"""Pytest configuration and fixtures."""

import logging
import os
from pathlib import Path

import pytest
import structlog

from chatcinema.config import CinemaSettings, set_settings
from chatcinema.parser import Movie

# Import CLI fixtures to make them available globally
from tests.cli_fixtures import cli_runner  # noqa: F401
from tests.fixtures import BACK_TO_THE_FUTURE, HACKERS, make_movie


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run every test with isolated settings and no CINEMA_ environment."""
    for key in list(os.environ):
        if key.startswith("CINEMA_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    settings = CinemaSettings(movies_dir=tmp_path / "movies", color_policy="hashed")
    set_settings(settings)

    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level

    yield settings

    for handler in root_logger.handlers[:]:
        if handler not in saved_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in saved_handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)
    structlog.reset_defaults()

    import chatcinema.config.settings as settings_module

    settings_module._settings = None


@pytest.fixture
def movies_dir(tmp_path) -> Path:
    """A movies directory with two valid scripts."""
    root = tmp_path / "movies"
    for identifier, script in {
        "back_to_the_future": BACK_TO_THE_FUTURE,
        "hackers": HACKERS,
    }.items():
        movie_dir = root / identifier
        movie_dir.mkdir(parents=True)
        (movie_dir / "script.txt").write_text(script, encoding="utf-8")
    return root


@pytest.fixture
def movie() -> Movie:
    """Three scenes of three zero-delay lines each."""
    return make_movie()
