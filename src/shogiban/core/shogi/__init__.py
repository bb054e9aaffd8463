"""Shogi engine adapter and utilities (built on python-shogi)."""

from shogiban.core.shogi.engine import (
    HAND_PIECE_TYPES,
    PROMOTED_PIECE_TYPES,
    BoardMove,
    BoardMoveRecord,
    Drop,
    DropRecord,
    MoveRecord,
    MoveSpec,
    ShogiPosition,
    parse_move,
)
from shogiban.core.shogi.notation import HISTORY_PREAMBLE, format_history, format_move
from shogiban.core.shogi.validation import (
    EmptyFragmentError,
    FragmentDecodeError,
    InvalidEncodingError,
    InvalidPositionError,
    InvalidTextError,
    validate_sfen,
)

__all__ = [
    "HAND_PIECE_TYPES",
    "HISTORY_PREAMBLE",
    "PROMOTED_PIECE_TYPES",
    "BoardMove",
    "BoardMoveRecord",
    "Drop",
    "DropRecord",
    "EmptyFragmentError",
    "FragmentDecodeError",
    "InvalidEncodingError",
    "InvalidPositionError",
    "InvalidTextError",
    "MoveRecord",
    "MoveSpec",
    "ShogiPosition",
    "format_history",
    "format_move",
    "parse_move",
    "validate_sfen",
]
