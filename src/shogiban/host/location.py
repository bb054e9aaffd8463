"""In-memory stand-in for a browser's location and session history."""

from collections.abc import Callable

from loguru import logger


def _normalize(fragment: str) -> str:
    if not fragment or fragment == "#":
        return ""
    return fragment if fragment.startswith("#") else f"#{fragment}"


class FragmentLocation:
    """A URL whose fragment can be replaced silently or navigated to.

    ``replace()`` mirrors ``history.replaceState``: it rewrites the current
    entry and notifies nobody. ``navigate()``, ``back()`` and ``forward()``
    mirror user navigation and fire the hash-change listeners.
    """

    def __init__(self, base_url: str = "https://shogiban.local/", fragment: str = "") -> None:
        self.base_url = base_url
        self._entries = [_normalize(fragment)]
        self._index = 0
        self._listeners: list[Callable[[], None]] = []

    @property
    def hash(self) -> str:
        return self._entries[self._index]

    @property
    def href(self) -> str:
        return f"{self.base_url}{self.hash}"

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def replace(self, fragment: str) -> None:
        self._entries[self._index] = _normalize(fragment)

    def navigate(self, fragment: str) -> None:
        """Push a new entry (dropping any forward entries) and notify listeners."""
        del self._entries[self._index + 1 :]
        self._entries.append(_normalize(fragment))
        self._index += 1
        self._notify()

    def back(self) -> bool:
        if self._index == 0:
            return False
        self._index -= 1
        self._notify()
        return True

    def forward(self) -> bool:
        if self._index + 1 >= len(self._entries):
            return False
        self._index += 1
        self._notify()
        return True

    def _notify(self) -> None:
        logger.debug(f"Location changed to entry {self._index}: {self.hash[:32]}")
        for callback in list(self._listeners):
            callback()
