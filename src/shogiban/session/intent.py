"""The in-progress move a player is building out of clicks.

A move intent is a small closed union of frozen value types::

    NoIntent -> WithOrigin(origin) -> WithDestination(origin, destination)

Transitions are pure functions returning the next intent; only the session
controller stores the result.
"""

from dataclasses import dataclass

import shogi

from shogiban.core.shogi.engine import ShogiPosition
from shogiban.core.utils.squares import NUM_SQUARES
from shogiban.session import oracle
from shogiban.session.origin import HandOrigin, Origin, SquareOrigin, origin_piece


@dataclass(frozen=True)
class NoIntent:
    pass


@dataclass(frozen=True)
class WithOrigin:
    origin: Origin


@dataclass(frozen=True)
class WithDestination:
    origin: Origin
    destination: int


MoveIntent = NoIntent | WithOrigin | WithDestination

NO_INTENT = NoIntent()


# -----------------------------------------------------------------------------
# Transitions
# -----------------------------------------------------------------------------


def after_square_click(intent: MoveIntent, square: int, position: ShogiPosition) -> MoveIntent:
    """Return the intent that follows a click on a board square.

    Args:
        intent: Current intent.
        square: Clicked square index.
        position: Current session position (not mutated).

    Returns:
        The next intent. Anything that is not a valid next step cancels back
        to ``NoIntent``.
    """
    if isinstance(intent, NoIntent):
        piece = position.piece_at(square)
        if piece is not None and piece.color == position.side_to_move:
            return WithOrigin(SquareOrigin(square))
        return NO_INTENT

    if isinstance(intent, WithOrigin):
        if oracle.can_move_to(intent.origin, square, position):
            return WithDestination(intent.origin, square)
        return NO_INTENT

    return NO_INTENT


def after_hand_click(
    intent: MoveIntent, piece_type: int, color: int, position: ShogiPosition
) -> MoveIntent:
    """Return the intent that follows a click on a hand piece.

    Hand clicks only ever start an intent; they never retarget one.
    """
    if isinstance(intent, NoIntent):
        if color == position.side_to_move and position.hand_count(piece_type, color) > 0:
            return WithOrigin(HandOrigin(piece_type))
    return NO_INTENT


# -----------------------------------------------------------------------------
# Derived queries
# -----------------------------------------------------------------------------


def origin_candidates(intent: MoveIntent, position: ShogiPosition) -> frozenset[int]:
    """Squares holding a piece that could start a move."""
    if not isinstance(intent, NoIntent):
        return frozenset()

    side = position.side_to_move
    return frozenset(
        square for square, piece in position.pieces().items() if piece.color == side
    )


def destination_candidates(intent: MoveIntent, position: ShogiPosition) -> frozenset[int]:
    """Squares the chosen origin can legally reach."""
    if not isinstance(intent, WithOrigin):
        return frozenset()

    return frozenset(
        square
        for square in range(NUM_SQUARES)
        if oracle.can_move_to(intent.origin, square, position)
    )


def chosen_origin(intent: MoveIntent) -> Origin | None:
    if isinstance(intent, (WithOrigin, WithDestination)):
        return intent.origin
    return None


def chosen_origin_square(intent: MoveIntent) -> int | None:
    origin = chosen_origin(intent)
    return origin.square if isinstance(origin, SquareOrigin) else None


def chosen_hand_piece_type(intent: MoveIntent) -> int | None:
    origin = chosen_origin(intent)
    return origin.piece_type if isinstance(origin, HandOrigin) else None


def chosen_destination(intent: MoveIntent) -> int | None:
    if isinstance(intent, WithDestination):
        return intent.destination
    return None


def ghost_piece(intent: MoveIntent, position: ShogiPosition) -> shogi.Piece | None:
    """The piece shown under the cursor while a move is being built."""
    origin = chosen_origin(intent)
    return origin_piece(origin, position) if origin is not None else None


def promotion_prompt_piece(intent: MoveIntent, position: ShogiPosition) -> shogi.Piece | None:
    """The piece awaiting a promotion decision, if any."""
    if isinstance(intent, WithDestination):
        return origin_piece(intent.origin, position)
    return None
