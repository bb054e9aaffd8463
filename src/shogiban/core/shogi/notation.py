"""KIF-style move notation for the history pane.

Each line reads ``<side><destination><piece><promotion><origin>``, e.g.
``☗７六歩　　（７７）`` or ``☖同　銀　　（３１）``. Drops end in ``打``.
"""

import shogi

from shogiban.core.shogi.engine import BoardMoveRecord, MoveRecord
from shogiban.core.utils.squares import square_file, square_rank

HISTORY_PREAMBLE = "手合割：平手"

FULL_WIDTH_DIGITS = "１２３４５６７８９"
KANJI_NUMERALS = "一二三四五六七八九"

SIDE_MARKS = {
    shogi.BLACK: "☗",
    shogi.WHITE: "☖",
}

# Padded to two columns so the history lines up
PIECE_NAMES = {
    shogi.KING: "玉　",
    shogi.ROOK: "飛　",
    shogi.BISHOP: "角　",
    shogi.GOLD: "金　",
    shogi.SILVER: "銀　",
    shogi.KNIGHT: "桂　",
    shogi.LANCE: "香　",
    shogi.PAWN: "歩　",
    shogi.PROM_ROOK: "龍　",
    shogi.PROM_BISHOP: "馬　",
    shogi.PROM_SILVER: "成銀",
    shogi.PROM_KNIGHT: "成桂",
    shogi.PROM_LANCE: "成香",
    shogi.PROM_PAWN: "と　",
}


# Single-character forms used in KIF board diagrams
BOARD_SYMBOLS = {
    shogi.KING: "玉",
    shogi.ROOK: "飛",
    shogi.BISHOP: "角",
    shogi.GOLD: "金",
    shogi.SILVER: "銀",
    shogi.KNIGHT: "桂",
    shogi.LANCE: "香",
    shogi.PAWN: "歩",
    shogi.PROM_ROOK: "龍",
    shogi.PROM_BISHOP: "馬",
    shogi.PROM_SILVER: "全",
    shogi.PROM_KNIGHT: "圭",
    shogi.PROM_LANCE: "杏",
    shogi.PROM_PAWN: "と",
}


def format_square(square: int) -> str:
    """Return a destination square in KIF form (e.g., '７六')."""
    return FULL_WIDTH_DIGITS[square_file(square) - 1] + KANJI_NUMERALS[square_rank(square) - 1]


def format_digits(square: int) -> str:
    """Return a board-move origin as two full-width digits (e.g., '７７')."""
    return FULL_WIDTH_DIGITS[square_file(square) - 1] + FULL_WIDTH_DIGITS[square_rank(square) - 1]


def format_move(record: MoveRecord, previous: MoveRecord | None = None) -> str:
    """Format a single history entry.

    Args:
        record: The move to format.
        previous: The move played just before it, used for the ``同`` shorthand.

    Returns:
        KIF-style line for the move.
    """
    side = SIDE_MARKS[record.color]

    if previous is not None and previous.to_square == record.to_square:
        destination = "同　"
    else:
        destination = format_square(record.to_square)

    if isinstance(record, BoardMoveRecord):
        piece = PIECE_NAMES[record.piece_before.piece_type]
        promotion = "成" if record.promoted else "　"
        origin = f"（{format_digits(record.from_square)}）"
    else:
        piece = PIECE_NAMES[record.piece_type]
        promotion = "　"
        origin = "　打"

    return f"{side}{destination}{piece}{promotion}{origin}"


def format_history(records: list[MoveRecord]) -> list[str]:
    """Format a whole move history, one line per move."""
    lines = []
    previous = None
    for record in records:
        lines.append(format_move(record, previous))
        previous = record
    return lines
