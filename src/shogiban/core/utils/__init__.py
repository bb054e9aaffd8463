"""Shared utilities for shogiban."""

from shogiban.core.utils.logging import new_session_id, session_logger, setup_logging
from shogiban.core.utils.squares import (
    FILES,
    NUM_SQUARES,
    RANKS,
    parse_square,
    square_file,
    square_name,
    square_rank,
)

__all__ = [
    "FILES",
    "NUM_SQUARES",
    "RANKS",
    "new_session_id",
    "parse_square",
    "session_logger",
    "setup_logging",
    "square_file",
    "square_name",
    "square_rank",
]
