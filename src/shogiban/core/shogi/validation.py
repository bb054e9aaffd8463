"""SFEN validation and fragment decoding errors.

python-shogi is lenient about some malformed SFEN strings (and crashes on
positions without kings), so positions arriving from outside the session
are checked here before they ever reach ``shogi.Board``.
"""

import re

from shogiban.core.errors import SerializedFormError

_PIECE_LETTERS = set("PLNSGBRKplnsgbrk")
_PROMOTABLE_LETTERS = set("PLNSBRplnsbr")
_HAND_PATTERN = re.compile(r"(?:[1-9][0-9]?[RBGSNLPrbgsnlp]|[RBGSNLPrbgsnlp])+")


class FragmentDecodeError(ValueError):
    """Base exception for URL fragments that cannot be turned into a position."""

    pass


class EmptyFragmentError(FragmentDecodeError):
    """Raised when the fragment carries no state at all."""

    pass


class InvalidEncodingError(FragmentDecodeError):
    """Raised when the fragment is not valid base64."""

    pass


class InvalidTextError(FragmentDecodeError):
    """Raised when the decoded bytes are not UTF-8 text."""

    pass


class InvalidPositionError(FragmentDecodeError):
    """Raised when the decoded text is not a valid position or move sequence."""

    pass


def validate_sfen(sfen: str) -> None:
    """Validate an SFEN string before handing it to python-shogi.

    Args:
        sfen: SFEN string with three or four whitespace-separated fields
            (board, side to move, hand, optional move number).

    Raises:
        SerializedFormError: If any field is malformed, or either side does
            not have exactly one king.
    """
    fields = sfen.split()
    if len(fields) not in (3, 4):
        msg = f"SFEN must have 3 or 4 fields, got {len(fields)}: {sfen!r}"
        raise SerializedFormError(msg)

    _validate_board_field(fields[0])

    if fields[1] not in ("b", "w"):
        msg = f"Side to move must be 'b' or 'w', got {fields[1]!r}"
        raise SerializedFormError(msg)

    if fields[2] != "-" and not _HAND_PATTERN.fullmatch(fields[2]):
        msg = f"Invalid hand field: {fields[2]!r}"
        raise SerializedFormError(msg)

    if len(fields) == 4 and (not fields[3].isdigit() or int(fields[3]) < 1):
        msg = f"Move number must be a positive integer, got {fields[3]!r}"
        raise SerializedFormError(msg)


def _validate_board_field(board: str) -> None:
    """Validate the piece-placement field of an SFEN string.

    Raises:
        SerializedFormError: If a rank is malformed or the king count is wrong.
    """
    rows = board.split("/")
    if len(rows) != 9:
        msg = f"Board must have 9 ranks, got {len(rows)}"
        raise SerializedFormError(msg)

    for rank_index, row in enumerate(rows):
        columns = 0
        promoted = False
        for char in row:
            if promoted:
                if char not in _PROMOTABLE_LETTERS:
                    msg = f"Rank {rank_index + 1}: '+{char}' is not a promotable piece"
                    raise SerializedFormError(msg)
                promoted = False
                columns += 1
            elif char == "+":
                promoted = True
            elif char.isdigit() and char != "0":
                columns += int(char)
            elif char in _PIECE_LETTERS:
                columns += 1
            else:
                msg = f"Rank {rank_index + 1}: unexpected character {char!r}"
                raise SerializedFormError(msg)

        if promoted:
            msg = f"Rank {rank_index + 1}: dangling '+'"
            raise SerializedFormError(msg)
        if columns != 9:
            msg = f"Rank {rank_index + 1} has {columns} files, expected 9"
            raise SerializedFormError(msg)

    # Legal-move generation needs both kings on the board
    for king, side in (("K", "black"), ("k", "white")):
        count = board.count(king)
        if count != 1:
            msg = f"Expected exactly one {side} king, found {count}"
            raise SerializedFormError(msg)
