"""Configuration management utilities."""

from shogiban.core.configs.loader import load_config, save_config
from shogiban.core.configs.schema import (
    AppConfig,
    DisplayConfig,
    LoggingConfig,
    SessionConfig,
    config_from_dict,
    config_to_dict,
)

__all__ = [
    "AppConfig",
    "DisplayConfig",
    "LoggingConfig",
    "SessionConfig",
    "config_from_dict",
    "config_to_dict",
    "load_config",
    "save_config",
]
