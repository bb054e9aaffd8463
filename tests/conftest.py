"""Pytest configuration and shared fixtures."""

import sys
from collections.abc import Iterator

import pytest
from loguru import logger

from shogiban.core.configs import SessionConfig
from shogiban.host.location import FragmentLocation
from shogiban.session.controller import SessionController


class RecordingEffects:
    """Effects sink that counts every call the session makes."""

    def __init__(self) -> None:
        self.sounds = 0
        self.scrolls = 0
        self.copy_feedback: list[bool] = []

    def play_move_sound(self) -> None:
        self.sounds += 1

    def scroll_history_into_view(self) -> None:
        self.scrolls += 1

    def copy_link_feedback(self, success: bool) -> None:
        self.copy_feedback.append(success)


@pytest.fixture
def location() -> FragmentLocation:
    """A location with no fragment, as on a first visit."""
    return FragmentLocation()


@pytest.fixture
def effects() -> RecordingEffects:
    return RecordingEffects()


@pytest.fixture
def controller(location: FragmentLocation, effects: RecordingEffects) -> SessionController:
    """A session on the standard starting position."""
    return SessionController(location, effects=effects, config=SessionConfig())


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Restore loguru's default handler after a test reconfigures it."""
    yield
    logger.remove()
    logger.add(sys.stderr)
