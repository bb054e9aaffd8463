"""Side-effect sinks the session triggers but does not implement."""

from collections.abc import Callable
from typing import Protocol

from loguru import logger


class SessionEffects(Protocol):
    """Front-end hooks for sound, scrolling and clipboard feedback."""

    def play_move_sound(self) -> None: ...

    def scroll_history_into_view(self) -> None: ...

    def copy_link_feedback(self, success: bool) -> None: ...


class NullEffects:
    """Effects sink for headless sessions; only logs what would happen."""

    def play_move_sound(self) -> None:
        logger.debug("play_move_sound")

    def scroll_history_into_view(self) -> None:
        logger.debug("scroll_history_into_view")

    def copy_link_feedback(self, success: bool) -> None:
        logger.debug(f"copy_link_feedback(success={success})")


class RenderTask:
    """A one-shot callback to run once the front-end has rendered.

    The session only signals interest; the host decides when "after render"
    is and calls ``fire()``. Firing more than once, or cancelling after
    firing, does nothing.
    """

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._done = False

    @property
    def pending(self) -> bool:
        return not self._done

    def cancel(self) -> None:
        self._done = True

    def fire(self) -> None:
        if self._done:
            return
        self._done = True
        self._callback()
