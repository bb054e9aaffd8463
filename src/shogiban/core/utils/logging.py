"""Logging configuration utilities.

Every record carries a ``session`` extra so interleaved games can be told
apart in one log. Code outside a session logs under ``NO_SESSION``; a
``SessionController`` binds its own id with :func:`session_logger`.
"""

import sys
import uuid
from pathlib import Path

from loguru import logger

NO_SESSION = "-"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[session]}</magenta> | "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[session]} | "
    "{name}:{function}:{line} | {message}"
)


def new_session_id() -> str:
    """Return a short id for tagging one session's log records."""
    return uuid.uuid4().hex[:8]


def session_logger(session_id: str):
    """Return a logger whose records carry ``session_id``."""
    return logger.bind(session=session_id)


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    rotation: str = "10 MB",
    retention: str = "1 week",
) -> None:
    """Configure loguru for shogiban sessions.

    Args:
        level: Minimum log level to display.
        log_file: Optional path to a log file.
        rotation: When to rotate the log file.
        retention: How long to keep old log files.
    """
    logger.remove()
    logger.configure(extra={"session": NO_SESSION})

    # The board is redrawn on stdout, so the stderr line stays short
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level=level,
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            compression="gz",
        )

    logger.info(f"Logging configured at level: {level}")
