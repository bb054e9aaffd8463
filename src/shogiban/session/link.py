"""Shareable-link codec: positions to URL fragments and back.

A fragment is ``#`` followed by the base64 encoding of the position's
serialized text (``<sfen> [moves <usi> ...]``). Decoding never mutates an
existing position; every failure surfaces as a ``FragmentDecodeError``.
"""

import base64
import binascii
from collections.abc import Callable
from typing import Protocol

from loguru import logger

from shogiban.core.errors import SerializedFormError
from shogiban.core.shogi.engine import ShogiPosition
from shogiban.core.shogi.validation import (
    EmptyFragmentError,
    FragmentDecodeError,
    InvalidEncodingError,
    InvalidPositionError,
    InvalidTextError,
)


class Location(Protocol):
    """The hosting environment's navigation state (a browser's ``location``)."""

    @property
    def hash(self) -> str: ...

    @property
    def href(self) -> str: ...

    def replace(self, fragment: str) -> None:
        """Overwrite the current entry without creating a new one or notifying."""
        ...

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` whenever the fragment changes from outside."""
        ...


def encode(position: ShogiPosition) -> str:
    """Encode a position as a URL fragment (including the leading '#')."""
    payload = base64.b64encode(position.serialize().encode("utf-8")).decode("ascii")
    return f"#{payload}"


def decode(fragment: str) -> ShogiPosition:
    """Decode a URL fragment into a new position.

    Args:
        fragment: Fragment text, with or without the leading '#'.

    Returns:
        A freshly built ShogiPosition.

    Raises:
        EmptyFragmentError: If the fragment carries no payload.
        InvalidEncodingError: If the payload is not valid base64.
        InvalidTextError: If the decoded bytes are not UTF-8.
        InvalidPositionError: If the text is not a valid position or
            replays an illegal move.
    """
    payload = fragment[1:] if fragment.startswith("#") else fragment
    if not payload:
        raise EmptyFragmentError("Fragment is empty")

    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        msg = f"Fragment is not valid base64: {e}"
        raise InvalidEncodingError(msg) from e

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        msg = f"Fragment does not decode to UTF-8 text: {e}"
        raise InvalidTextError(msg) from e

    try:
        return ShogiPosition.from_serialized(text)
    except SerializedFormError as e:
        msg = f"Fragment does not hold a valid position: {e}"
        raise InvalidPositionError(msg) from e


def try_decode(fragment: str) -> ShogiPosition | None:
    """Decode a fragment, returning None instead of raising on bad input."""
    try:
        return decode(fragment)
    except FragmentDecodeError as e:
        logger.debug(f"Ignoring fragment {fragment!r}: {e}")
        return None


def load_initial(location: Location, starting_sfen: str) -> tuple[ShogiPosition, bool]:
    """Load the startup position from the location, falling back to a fresh game.

    Args:
        location: Navigation state to read the fragment from.
        starting_sfen: Position to use when the fragment is missing or bad.

    Returns:
        Tuple of (position, restored) where ``restored`` is True when the
        position came from the fragment.
    """
    fragment = location.hash
    try:
        return decode(fragment), True
    except EmptyFragmentError:
        logger.debug("No fragment present, starting a new game")
    except FragmentDecodeError as e:
        logger.warning(f"Could not restore game from link, starting a new game: {e}")
    return ShogiPosition(starting_sfen), False
