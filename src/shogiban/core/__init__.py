"""Core utilities shared by the session layer and the front-ends."""

from shogiban.core.configs import load_config, save_config
from shogiban.core.errors import (
    EmptyHistoryError,
    IllegalMoveError,
    PreconditionViolation,
    SerializedFormError,
)
from shogiban.core.utils.logging import setup_logging

__all__ = [
    "EmptyHistoryError",
    "IllegalMoveError",
    "PreconditionViolation",
    "SerializedFormError",
    "load_config",
    "save_config",
    "setup_logging",
]
