"""Shogi position engine built on python-shogi.

``ShogiPosition`` is the single mutable game state a session owns. It wraps
``shogi.Board`` and adds what an interactive front-end needs on top of the
bare rules engine: move records that remember the piece that moved, a
serialized form that carries the whole move history, and cheap disposable
copies for legality probing.
"""

from dataclasses import dataclass

import shogi
from loguru import logger

from shogiban.core.errors import EmptyHistoryError, IllegalMoveError, SerializedFormError
from shogiban.core.shogi.validation import validate_sfen
from shogiban.core.utils.squares import parse_square, square_name

# Hand pieces in display order
HAND_PIECE_TYPES = (
    shogi.ROOK,
    shogi.BISHOP,
    shogi.GOLD,
    shogi.SILVER,
    shogi.KNIGHT,
    shogi.LANCE,
    shogi.PAWN,
)

PROMOTED_PIECE_TYPES = {
    shogi.PAWN: shogi.PROM_PAWN,
    shogi.LANCE: shogi.PROM_LANCE,
    shogi.KNIGHT: shogi.PROM_KNIGHT,
    shogi.SILVER: shogi.PROM_SILVER,
    shogi.BISHOP: shogi.PROM_BISHOP,
    shogi.ROOK: shogi.PROM_ROOK,
}

_DROP_SYMBOLS = {
    shogi.PAWN: "P",
    shogi.LANCE: "L",
    shogi.KNIGHT: "N",
    shogi.SILVER: "S",
    shogi.GOLD: "G",
    shogi.BISHOP: "B",
    shogi.ROOK: "R",
}
_DROP_PIECE_TYPES = {symbol: piece_type for piece_type, symbol in _DROP_SYMBOLS.items()}


@dataclass(frozen=True)
class BoardMove:
    """A move of a piece already on the board."""

    from_square: int
    to_square: int
    promote: bool = False

    def usi(self) -> str:
        """Return the move in USI notation (e.g., '7g7f', '2c2b+')."""
        suffix = "+" if self.promote else ""
        return f"{square_name(self.from_square)}{square_name(self.to_square)}{suffix}"


@dataclass(frozen=True)
class Drop:
    """A piece placed from the hand onto an empty square."""

    piece_type: int
    to_square: int

    def usi(self) -> str:
        """Return the drop in USI notation (e.g., 'P*5e')."""
        return f"{_DROP_SYMBOLS[self.piece_type]}*{square_name(self.to_square)}"


MoveSpec = BoardMove | Drop


@dataclass(frozen=True)
class BoardMoveRecord:
    """History entry for a completed board move."""

    from_square: int
    to_square: int
    promoted: bool
    piece_before: shogi.Piece
    captured: shogi.Piece | None = None

    @property
    def color(self) -> int:
        return self.piece_before.color

    def usi(self) -> str:
        return BoardMove(self.from_square, self.to_square, self.promoted).usi()


@dataclass(frozen=True)
class DropRecord:
    """History entry for a completed drop."""

    piece_type: int
    color: int
    to_square: int

    def usi(self) -> str:
        return Drop(self.piece_type, self.to_square).usi()


MoveRecord = BoardMoveRecord | DropRecord


def parse_move(usi: str) -> MoveSpec:
    """Parse a USI move string into a move specification.

    Args:
        usi: Move in USI notation ('7g7f', '8h2b+', 'P*5e').

    Returns:
        A BoardMove or Drop.

    Raises:
        SerializedFormError: If the string is not valid USI move syntax.
    """
    is_drop = len(usi) == 4 and usi[1] == "*" and usi[0] in _DROP_PIECE_TYPES
    is_board_move = len(usi) == 4 or (len(usi) == 5 and usi[4] == "+")
    if not (is_drop or is_board_move):
        msg = f"Invalid USI move {usi!r}"
        raise SerializedFormError(msg)

    try:
        if is_drop:
            return Drop(_DROP_PIECE_TYPES[usi[0]], parse_square(usi[2:]))
        return BoardMove(parse_square(usi[0:2]), parse_square(usi[2:4]), promote=len(usi) == 5)
    except ValueError as e:
        msg = f"Invalid USI move {usi!r}: {e}"
        raise SerializedFormError(msg) from e


def _turn_flipped(board: shogi.Board) -> shogi.Board:
    fields = board.sfen().split()
    fields[1] = "w" if fields[1] == "b" else "b"
    return shogi.Board(" ".join(fields))


def _board_from_sfen(sfen: str) -> shogi.Board:
    """Build a python-shogi board from validated SFEN text.

    Raises:
        SerializedFormError: If the SFEN is malformed, or the side that just
            moved is still in check (its king could be captured).
    """
    validate_sfen(sfen)
    fields = sfen.split()
    if len(fields) == 3:
        fields.append("1")
    try:
        board = shogi.Board(" ".join(fields))
    except (ValueError, IndexError, KeyError) as e:
        msg = f"Invalid SFEN {sfen!r}: {e}"
        raise SerializedFormError(msg) from e

    if _turn_flipped(board).is_check():
        msg = f"Side not to move is in check: {sfen!r}"
        raise SerializedFormError(msg)
    return board


class ShogiPosition:
    """Authoritative shogi position: board, hands, side to move and history.

    The position remembers the SFEN its history started from, so that
    ``serialize()`` can emit ``<root sfen> moves <usi> ...`` and a restored
    position keeps its full history.
    """

    def __init__(self, sfen: str = shogi.STARTING_SFEN) -> None:
        """Initialize a position without history.

        Args:
            sfen: SFEN string of the position to start from.

        Raises:
            SerializedFormError: If the SFEN is malformed or leaves the side
                that just moved in check.
        """
        self._board = _board_from_sfen(sfen)
        self._root_sfen = self._board.sfen()
        self._history: list[MoveRecord] = []
        self._legal_usi: set[str] | None = None

    @classmethod
    def standard(cls) -> "ShogiPosition":
        """Return the standard even-game starting position."""
        return cls(shogi.STARTING_SFEN)

    @classmethod
    def from_serialized(cls, text: str) -> "ShogiPosition":
        """Build a position from its serialized form.

        Raises:
            SerializedFormError: If the text is malformed or replays an
                illegal move.
        """
        position = cls()
        position.set_from_serialized(text)
        return position

    def set_from_serialized(self, text: str) -> None:
        """Replace this position with the one described by ``text``.

        Accepts a bare SFEN, ``startpos``, or either of those followed by
        ``moves <usi> ...``. An optional leading ``sfen``/``position`` keyword
        is ignored. On failure this position is left untouched.

        Raises:
            SerializedFormError: If the text is malformed or replays an
                illegal move.
        """
        tokens = text.split()
        if tokens and tokens[0] == "position":
            tokens = tokens[1:]
        if tokens and tokens[0] == "sfen":
            tokens = tokens[1:]

        if "moves" in tokens:
            split = tokens.index("moves")
            root_tokens, move_tokens = tokens[:split], tokens[split + 1 :]
        else:
            root_tokens, move_tokens = tokens, []

        if root_tokens == ["startpos"]:
            root_sfen = shogi.STARTING_SFEN
        else:
            root_sfen = " ".join(root_tokens)

        replay = ShogiPosition(root_sfen)
        for ply, usi in enumerate(move_tokens, start=1):
            try:
                replay.make_move(parse_move(usi))
            except IllegalMoveError as e:
                msg = f"Move {ply} ({usi}) is illegal: {e}"
                raise SerializedFormError(msg) from e

        self._board = replay._board
        self._root_sfen = replay._root_sfen
        self._history = replay._history
        self._legal_usi = None

    def serialize(self) -> str:
        """Return the root SFEN plus the USI moves played since."""
        if not self._history:
            return self._root_sfen
        moves = " ".join(record.usi() for record in self._history)
        return f"{self._root_sfen} moves {moves}"

    def sfen(self) -> str:
        """Return the SFEN of the current position (no history)."""
        return self._board.sfen()

    def copy(self) -> "ShogiPosition":
        """Return a disposable copy of the current position without history."""
        return ShogiPosition(self._board.sfen())

    def piece_at(self, square: int) -> shogi.Piece | None:
        return self._board.piece_at(square)

    def pieces(self) -> dict[int, shogi.Piece]:
        """Return every occupied square mapped to its piece."""
        pieces = {}
        for square in shogi.SQUARES:
            piece = self._board.piece_at(square)
            if piece is not None:
                pieces[square] = piece
        return pieces

    @property
    def side_to_move(self) -> int:
        return self._board.turn

    def hand_count(self, piece_type: int, color: int) -> int:
        return self._board.pieces_in_hand[color][piece_type]

    @property
    def move_history(self) -> list[MoveRecord]:
        return list(self._history)

    def in_check(self, color: int) -> bool:
        """Return whether ``color``'s king is attacked.

        python-shogi only reports check for the side to move, so the other
        side is probed on a board with the turn flipped.
        """
        if color == self._board.turn:
            return self._board.is_check()
        return _turn_flipped(self._board).is_check()

    def is_legal(self, move: MoveSpec) -> bool:
        if self._legal_usi is None:
            self._legal_usi = {candidate.usi() for candidate in self._board.legal_moves}
        return move.usi() in self._legal_usi

    def make_move(self, move: MoveSpec) -> MoveRecord:
        """Apply a move if the rules engine accepts it.

        Args:
            move: BoardMove or Drop to apply.

        Returns:
            The history record appended for the move.

        Raises:
            IllegalMoveError: If the move is not legal in this position.
        """
        if not self.is_legal(move):
            msg = f"Illegal move {move.usi()} in {self._board.sfen()}"
            raise IllegalMoveError(msg)

        if isinstance(move, BoardMove):
            record: MoveRecord = BoardMoveRecord(
                from_square=move.from_square,
                to_square=move.to_square,
                promoted=move.promote,
                piece_before=self._board.piece_at(move.from_square),
                captured=self._board.piece_at(move.to_square),
            )
        else:
            record = DropRecord(
                piece_type=move.piece_type,
                color=self._board.turn,
                to_square=move.to_square,
            )

        self._board.push(shogi.Move.from_usi(move.usi()))
        self._history.append(record)
        self._legal_usi = None
        return record

    def unmake_move(self) -> MoveRecord:
        """Take back the last move.

        Returns:
            The history record that was removed.

        Raises:
            EmptyHistoryError: If no move has been played.
        """
        if not self._history:
            msg = "Cannot undo: move history is empty"
            logger.error(msg)
            raise EmptyHistoryError(msg)

        self._board.pop()
        self._legal_usi = None
        return self._history.pop()
