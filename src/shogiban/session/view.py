"""Derived view-model handed to front-ends after every session event."""

from dataclasses import dataclass, field

import shogi

from shogiban.core.errors import PreconditionViolation
from shogiban.core.shogi.engine import (
    HAND_PIECE_TYPES,
    PROMOTED_PIECE_TYPES,
    BoardMoveRecord,
    ShogiPosition,
)
from shogiban.core.shogi.notation import format_history
from shogiban.session import intent as intents
from shogiban.session.intent import MoveIntent, NoIntent

COLORS = (shogi.BLACK, shogi.WHITE)


@dataclass(frozen=True)
class HandPiece:
    """One slot of a player's hand; ``count`` may be zero."""

    piece_type: int
    count: int


@dataclass(frozen=True)
class PromotionPrompt:
    """The two choices offered while a promotion decision is pending."""

    piece: shogi.Piece
    promoted: shogi.Piece


@dataclass
class ViewModel:
    """Everything a front-end needs to draw the session.

    Recomputed from scratch after every event and never persisted.
    """

    pieces: dict[int, shogi.Piece]
    side_to_move: int
    origin_candidates: frozenset[int]
    destination_candidates: frozenset[int]
    move_origin: int | None
    move_destination: int | None
    previous_move_origin: int | None
    previous_move_destination: int | None
    ghost_piece: shogi.Piece | None
    promotion_prompt: PromotionPrompt | None
    in_check: dict[int, bool]
    hands: dict[int, list[HandPiece]]
    hand_selection: dict[int, int | None]
    hand_selectable: dict[int, bool]
    can_undo: bool
    history: list[str] = field(default_factory=list)


def _promotion_prompt(intent: MoveIntent, position: ShogiPosition) -> PromotionPrompt | None:
    piece = intents.promotion_prompt_piece(intent, position)
    if piece is None:
        return None

    promoted_type = PROMOTED_PIECE_TYPES.get(piece.piece_type)
    if promoted_type is None:
        msg = f"Promotion prompt raised for a piece that cannot promote: {piece}"
        raise PreconditionViolation(msg)
    return PromotionPrompt(piece=piece, promoted=shogi.Piece(promoted_type, piece.color))


def build_view(intent: MoveIntent, position: ShogiPosition) -> ViewModel:
    """Derive the view-model for an intent over a position.

    Args:
        intent: Current move intent.
        position: Current session position (not mutated).

    Returns:
        A fresh ViewModel.
    """
    side = position.side_to_move
    history = position.move_history
    previous = history[-1] if history else None
    hand_type = intents.chosen_hand_piece_type(intent)

    return ViewModel(
        pieces=position.pieces(),
        side_to_move=side,
        origin_candidates=intents.origin_candidates(intent, position),
        destination_candidates=intents.destination_candidates(intent, position),
        move_origin=intents.chosen_origin_square(intent),
        move_destination=intents.chosen_destination(intent),
        previous_move_origin=(
            previous.from_square if isinstance(previous, BoardMoveRecord) else None
        ),
        previous_move_destination=previous.to_square if previous is not None else None,
        ghost_piece=intents.ghost_piece(intent, position),
        promotion_prompt=_promotion_prompt(intent, position),
        in_check={color: position.in_check(color) for color in COLORS},
        hands={
            color: [
                HandPiece(piece_type, position.hand_count(piece_type, color))
                for piece_type in HAND_PIECE_TYPES
            ]
            for color in COLORS
        },
        hand_selection={color: hand_type if color == side else None for color in COLORS},
        hand_selectable={
            color: color == side and isinstance(intent, NoIntent) for color in COLORS
        },
        can_undo=bool(history),
        history=format_history(history),
    )
