"""Tests for core utilities."""

from pathlib import Path

import pytest
import shogi
from loguru import logger
from omegaconf import OmegaConf

from shogiban.core.configs import (
    AppConfig,
    LoggingConfig,
    SessionConfig,
    config_from_dict,
    config_to_dict,
    load_config,
    save_config,
)
from shogiban.core.utils import (
    new_session_id,
    parse_square,
    session_logger,
    setup_logging,
    square_file,
    square_name,
    square_rank,
)
from shogiban.core.utils.logging import NO_SESSION
from shogiban.session.controller import SessionController

DEFAULT_CONFIG = Path(__file__).parent.parent / "configs" / "default.yaml"


class TestConfig:
    """Tests for configuration utilities."""

    def test_load_config_from_file(self, tmp_path: Path) -> None:
        """Test loading a config file."""
        config_file = tmp_path / "test.yaml"
        config_file.write_text("session:\n  sound_enabled: false\nlogging:\n  level: DEBUG\n")

        config = load_config(config_file)

        assert config.session.sound_enabled is False
        assert config.logging.level == "DEBUG"

    def test_load_config_with_overrides(self, tmp_path: Path) -> None:
        """Test loading config with CLI overrides."""
        config_file = tmp_path / "test.yaml"
        config_file.write_text("logging:\n  level: INFO\n")

        config = load_config(config_file, overrides=["logging.level=WARNING"])

        assert config.logging.level == "WARNING"

    def test_load_missing_config_raises(self, tmp_path: Path) -> None:
        """Test that a missing file is reported, not silently defaulted."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_save_config(self, tmp_path: Path) -> None:
        """Test saving a config file."""
        config = {"display": {"flip_board": True}}
        config_file = tmp_path / "nested" / "output.yaml"

        save_config(config, config_file)

        assert config_file.exists()
        loaded = load_config(config_file)
        assert loaded.display.flip_board is True

    def test_default_config_matches_schema(self) -> None:
        """Test that the shipped default.yaml builds the default AppConfig."""
        config = config_from_dict(OmegaConf.to_container(load_config(DEFAULT_CONFIG)))

        assert config == AppConfig()


class TestConfigSchema:
    """Tests for the dataclass config schema."""

    def test_defaults(self) -> None:
        """Test that the defaults start a standard sounded game."""
        config = AppConfig()
        assert config.session.starting_sfen == shogi.STARTING_SFEN
        assert config.session.sound_enabled is True
        assert config.logging.file is None

    def test_config_from_partial_dict(self) -> None:
        """Test that missing sections fall back to defaults."""
        config = config_from_dict({"session": {"sound_enabled": False}})
        assert config.session.sound_enabled is False
        assert config.display.show_candidates is True

    def test_log_file_string_becomes_path(self) -> None:
        """Test that a string log file path is converted to Path."""
        config = LoggingConfig(file="logs/shogiban.log")
        assert config.file == Path("logs/shogiban.log")

    def test_config_to_dict_stringifies_paths(self) -> None:
        """Test that Path values are YAML-safe after conversion."""
        config = AppConfig(logging=LoggingConfig(file=Path("logs/out.log")))
        data = config_to_dict(config)
        assert data["logging"]["file"] == "logs/out.log"
        assert config_from_dict(data) == config

    def test_empty_starting_sfen_rejected(self) -> None:
        """Test that a blank starting position is rejected eagerly."""
        with pytest.raises(ValueError):
            SessionConfig(starting_sfen="  ")

    @pytest.mark.parametrize(
        "sfen",
        ["bogus", "4k4/9/9/9/9/9/9/9/4K4 x - 1", "4k4/9/9/9/4R4/9/9/9/K8 b - 1"],
    )
    def test_unplayable_starting_sfen_rejected(self, sfen: str) -> None:
        """Test that a starting position the engine refuses fails at load time."""
        with pytest.raises(ValueError, match="Invalid starting_sfen"):
            SessionConfig(starting_sfen=sfen)

    def test_unplayable_starting_sfen_rejected_from_dict(self) -> None:
        """Test that a bad YAML value is caught before a session is built."""
        with pytest.raises(ValueError, match="Invalid starting_sfen"):
            config_from_dict({"session": {"starting_sfen": "bogus"}})


class TestSquares:
    """Tests for square name/index conversion."""

    @pytest.mark.parametrize(
        ("name", "index"),
        [("9a", 0), ("1a", 8), ("9b", 9), ("5e", 40), ("7g", 56), ("7f", 47), ("1i", 80)],
    )
    def test_parse_square(self, name: str, index: int) -> None:
        """Test known square indices."""
        assert parse_square(name) == index
        assert square_name(index) == name

    def test_file_and_rank(self) -> None:
        """Test file/rank numbers as used in KIF notation."""
        square = parse_square("7g")
        assert square_file(square) == 7
        assert square_rank(square) == 7

    @pytest.mark.parametrize("name", ["", "0a", "7j", "77", "7g7"])
    def test_parse_invalid_square(self, name: str) -> None:
        """Test that malformed square names are rejected."""
        with pytest.raises(ValueError):
            parse_square(name)

    @pytest.mark.parametrize("index", [-1, 81])
    def test_square_name_out_of_range(self, index: int) -> None:
        """Test that out-of-range indices are rejected."""
        with pytest.raises(ValueError):
            square_name(index)


class TestLogging:
    """Tests for loguru setup."""

    def test_log_file_receives_messages(self, tmp_path: Path, reset_logging: None) -> None:
        """Test that a configured log file gets the session's messages."""
        log_file = tmp_path / "logs" / "shogiban.log"
        setup_logging(level="DEBUG", log_file=log_file)

        logger.info("Played 7g7f")
        logger.complete()

        text = log_file.read_text(encoding="utf-8")
        assert "Logging configured at level: DEBUG" in text
        assert "Played 7g7f" in text

    def test_records_carry_session_context(self, tmp_path: Path, reset_logging: None) -> None:
        """Test that bound records show their session id and others show the placeholder."""
        log_file = tmp_path / "shogiban.log"
        setup_logging(level="INFO", log_file=log_file)

        session_logger("abc12345").info("Played 7g7f")
        logger.info("Outside any session")
        logger.complete()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        played = next(line for line in lines if "Played 7g7f" in line)
        outside = next(line for line in lines if "Outside any session" in line)
        assert "| abc12345 |" in played
        assert f"| {NO_SESSION} |" in outside

    def test_controller_logs_under_its_session_id(
        self, tmp_path: Path, reset_logging: None, controller: SessionController
    ) -> None:
        """Test that a session's moves are tagged with that session's id."""
        log_file = tmp_path / "shogiban.log"
        setup_logging(level="INFO", log_file=log_file)

        controller.square_clicked(parse_square("7g"))
        controller.square_clicked(parse_square("7f"))
        logger.complete()

        played = next(
            line
            for line in log_file.read_text(encoding="utf-8").splitlines()
            if "Played 7g7f" in line
        )
        assert len(controller.session_id) == 8
        assert f"| {controller.session_id} |" in played

    def test_sessions_get_distinct_ids(self) -> None:
        """Test that two sessions never share a log tag."""
        assert new_session_id() != new_session_id()
