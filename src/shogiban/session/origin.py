"""Where a candidate move starts: a board square or the mover's hand."""

from dataclasses import dataclass

import shogi

from shogiban.core.shogi.engine import BoardMove, Drop, MoveSpec, ShogiPosition


@dataclass(frozen=True)
class SquareOrigin:
    """A move that starts from a piece on the board."""

    square: int


@dataclass(frozen=True)
class HandOrigin:
    """A drop of a piece held by the side to move."""

    piece_type: int


Origin = SquareOrigin | HandOrigin


def origin_piece(origin: Origin, position: ShogiPosition) -> shogi.Piece | None:
    """Resolve an origin to the piece that would move."""
    if isinstance(origin, SquareOrigin):
        return position.piece_at(origin.square)
    return shogi.Piece(origin.piece_type, position.side_to_move)


def resolve_move(origin: Origin, destination: int, promote: bool) -> MoveSpec:
    """Turn an origin, destination and promotion choice into a concrete move.

    Drops ignore ``promote``; a dropped piece always enters unpromoted.
    """
    if isinstance(origin, SquareOrigin):
        return BoardMove(origin.square, destination, promote)
    return Drop(origin.piece_type, destination)
