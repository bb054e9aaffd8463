"""Speculative legality checks for moves under construction.

Every probe plays the candidate move on a fresh ``ShogiPosition.copy()`` and
throws the copy away, so highlighting destinations can never advance or
corrupt the real game. Rejections from the engine are the normal answer to
"no" and are neither logged nor re-raised.
"""

from shogiban.core.errors import IllegalMoveError
from shogiban.core.shogi.engine import MoveSpec, ShogiPosition
from shogiban.session.origin import HandOrigin, Origin, resolve_move


def _succeeds(move: MoveSpec, sandbox: ShogiPosition) -> bool:
    try:
        sandbox.make_move(move)
    except IllegalMoveError:
        return False
    return True


def can_move_to(origin: Origin, destination: int, position: ShogiPosition) -> bool:
    """Return whether the origin's piece can land on ``destination`` at all.

    Board moves are tried promoted first, then unpromoted; drops are tried
    as-is. This says nothing about whether promotion is forced or forbidden.
    """
    sandbox = position.copy()
    if isinstance(origin, HandOrigin):
        return _succeeds(resolve_move(origin, destination, promote=False), sandbox)

    for promote in (True, False):
        if _succeeds(resolve_move(origin, destination, promote), sandbox):
            return True
    return False


def must_promote(origin: Origin, destination: int, position: ShogiPosition) -> bool:
    """Return whether only the promoting variant of the move is legal."""
    if isinstance(origin, HandOrigin):
        return False
    return not _succeeds(resolve_move(origin, destination, promote=False), position.copy())


def cant_promote(origin: Origin, destination: int, position: ShogiPosition) -> bool:
    """Return whether the promoting variant of the move is illegal."""
    if isinstance(origin, HandOrigin):
        return True
    return not _succeeds(resolve_move(origin, destination, promote=True), position.copy())
