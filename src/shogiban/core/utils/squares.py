"""Shogi square utilities for board indexing.

This module converts between USI square names (e.g., "7g") and the board
indices used by python-shogi and throughout shogiban.

Board indexing convention (row-major from 9a):
    9a=0,  8a=1,  7a=2,  ...  1a=8
    9b=9,  8b=10, 7b=11, ...  1b=17
    ...
    9i=72, 8i=73, 7i=74, ...  1i=80

This matches visual reading order (top-left to bottom-right when viewing
the board from black's side). Files count 9..1 from left to right and
ranks run a..i from top to bottom.
"""

# File digits (left to right) and rank letters (top to bottom)
FILES = "987654321"
RANKS = "abcdefghi"

NUM_SQUARES = 81


def parse_square(square: str) -> int:
    """Convert a USI square name to a board index (0-80).

    Args:
        square: USI notation for a square (e.g., '7g', '5e').

    Returns:
        Index into the 81-square board, starting from 9a (index 0)
        to 1i (index 80).

    Raises:
        ValueError: If the square notation is invalid.
    """
    if len(square) != 2:
        msg = f"Invalid square notation: {square!r}"
        raise ValueError(msg)

    file_char, rank_char = square[0], square[1].lower()

    if file_char not in FILES or rank_char not in RANKS:
        msg = f"Invalid square notation: {square!r}"
        raise ValueError(msg)

    row = RANKS.index(rank_char)
    column = FILES.index(file_char)
    return row * 9 + column


def square_name(index: int) -> str:
    """Convert a board index to USI notation.

    Args:
        index: Board index (0-80).

    Returns:
        USI notation for the square (e.g., '7g').

    Raises:
        ValueError: If the index is out of range.
    """
    if not 0 <= index < NUM_SQUARES:
        msg = f"Invalid board index: {index}"
        raise ValueError(msg)

    row, column = divmod(index, 9)
    return FILES[column] + RANKS[row]


def square_file(index: int) -> int:
    """Return the file number (1-9) of a board index."""
    return 9 - index % 9


def square_rank(index: int) -> int:
    """Return the rank number (1-9, where 1 is rank 'a') of a board index."""
    return index // 9 + 1
