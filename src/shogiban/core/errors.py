"""Exception types shared by the engine adapter and the session layer."""


class PreconditionViolation(RuntimeError):
    """Raised when a transition is invoked in a state that forbids it.

    These indicate the front-end and the session have drifted out of sync
    (e.g., a promotion choice with no pending move). They are never caught
    inside shogiban.
    """

    pass


class EmptyHistoryError(PreconditionViolation):
    """Raised when undoing a move with an empty move history."""

    pass


class SerializedFormError(ValueError):
    """Raised when SFEN / USI position text cannot be parsed."""

    pass


class IllegalMoveError(ValueError):
    """Raised when the rules engine rejects a move."""

    pass
