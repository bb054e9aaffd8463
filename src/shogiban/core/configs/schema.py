"""Strongly-typed configuration schemas for shogiban sessions.

These dataclasses mirror the YAML layout under ``configs/`` and are the
single source of truth for every option a session reads.
"""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import shogi

from shogiban.core.errors import SerializedFormError
from shogiban.core.shogi.engine import ShogiPosition


@dataclass
class SessionConfig:
    """Configuration for the game session itself."""

    starting_sfen: str = shogi.STARTING_SFEN  # Used by restart and startup fallback
    sound_enabled: bool = True

    def __post_init__(self) -> None:
        """Validate the starting position eagerly.

        Startup fallback and restart both build this position, so it must
        be playable before a session ever sees it.
        """
        if not self.starting_sfen.strip():
            msg = "starting_sfen must not be empty"
            raise ValueError(msg)
        try:
            ShogiPosition(self.starting_sfen)
        except SerializedFormError as e:
            msg = f"Invalid starting_sfen: {e}"
            raise ValueError(msg) from e


@dataclass
class LoggingConfig:
    """Configuration for loguru handlers."""

    level: str = "INFO"
    file: Path | None = None
    rotation: str = "10 MB"
    retention: str = "1 week"

    def __post_init__(self) -> None:
        """Convert string to Path if needed."""
        if isinstance(self.file, str):
            self.file = Path(self.file)


@dataclass
class DisplayConfig:
    """Configuration for the terminal front-end."""

    flip_board: bool = False  # Draw the board from white's side
    show_candidates: bool = True


@dataclass
class AppConfig:
    """Top-level configuration combining all sub-configs."""

    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def config_from_dict(data: dict[str, Any]) -> AppConfig:
    """Create AppConfig from a dictionary (e.g., from OmegaConf).

    Args:
        data: Dictionary with configuration values.

    Returns:
        AppConfig instance.
    """
    return AppConfig(
        session=SessionConfig(**data.get("session", {})),
        logging=LoggingConfig(**data.get("logging", {})),
        display=DisplayConfig(**data.get("display", {})),
    )


def config_to_dict(config: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to a dictionary for serialization.

    Args:
        config: AppConfig instance.

    Returns:
        Dictionary representation.
    """
    result = asdict(config)
    # Convert Path objects to strings for YAML serialization
    if result["logging"]["file"] is not None:
        result["logging"]["file"] = str(result["logging"]["file"])
    return result
