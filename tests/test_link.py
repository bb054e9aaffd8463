"""Tests for the shareable-link fragment codec."""

import base64

import pytest
import shogi

from shogiban.core.shogi import (
    EmptyFragmentError,
    FragmentDecodeError,
    InvalidEncodingError,
    InvalidPositionError,
    InvalidTextError,
    ShogiPosition,
    parse_move,
)
from shogiban.host.location import FragmentLocation
from shogiban.session.link import decode, encode, load_initial, try_decode


def fragment_for(text: bytes) -> str:
    return "#" + base64.b64encode(text).decode("ascii")


class TestEncode:
    """Tests for encoding positions."""

    def test_fragment_is_base64_of_serialized_form(self) -> None:
        """Test the fragment layout."""
        position = ShogiPosition()
        fragment = encode(position)

        assert fragment.startswith("#")
        assert base64.b64decode(fragment[1:]).decode("utf-8") == shogi.STARTING_SFEN

    def test_round_trip_keeps_history(self) -> None:
        """Test that a decoded fragment restores position and history."""
        position = ShogiPosition()
        for usi in ["7g7f", "3c3d", "8h2b+"]:
            position.make_move(parse_move(usi))

        restored = decode(encode(position))

        assert restored.serialize() == position.serialize()
        assert restored.hand_count(shogi.BISHOP, shogi.BLACK) == 1

    def test_leading_hash_is_optional(self) -> None:
        """Test decoding a bare payload."""
        fragment = encode(ShogiPosition())
        assert decode(fragment[1:]).sfen() == shogi.STARTING_SFEN


class TestDecodeErrors:
    """Tests for each way a fragment can be bad."""

    @pytest.mark.parametrize("fragment", ["", "#"])
    def test_empty(self, fragment: str) -> None:
        """Test that a missing payload is its own error."""
        with pytest.raises(EmptyFragmentError):
            decode(fragment)

    @pytest.mark.parametrize("fragment", ["#####", "#not base64!", "#abc"])
    def test_invalid_base64(self, fragment: str) -> None:
        """Test that malformed base64 is rejected."""
        with pytest.raises(InvalidEncodingError):
            decode(fragment)

    def test_invalid_utf8(self) -> None:
        """Test that non-UTF-8 bytes are rejected."""
        with pytest.raises(InvalidTextError):
            decode(fragment_for(b"\xff\xfe\xfd"))

    @pytest.mark.parametrize(
        "text",
        [
            b"hello",
            b"lnsgkgsnl/1r5b1/ppppppppp/9/9/9/PPPPPPPPP/1B5R1/LNSGKGSNL q - 1",
            f"{shogi.STARTING_SFEN} moves 7g7e".encode(),
            b"4k4/9/9/9/4R4/9/9/9/K8 b - 1",
            b"4k4/9/p8/9/4R4/9/9/9/K8 b - 1 moves 5e5a",
        ],
    )
    def test_invalid_position(self, text: bytes) -> None:
        """Test that text which is not a reachable position is rejected."""
        with pytest.raises(InvalidPositionError):
            decode(fragment_for(text))

    def test_errors_share_a_base(self) -> None:
        """Test that callers can catch every decode failure at once."""
        for error in (EmptyFragmentError, InvalidEncodingError, InvalidTextError):
            assert issubclass(error, FragmentDecodeError)
        assert issubclass(FragmentDecodeError, ValueError)

    def test_try_decode_returns_none(self) -> None:
        """Test the non-raising variant."""
        assert try_decode("#####") is None
        assert try_decode(encode(ShogiPosition())) is not None


class TestLoadInitial:
    """Tests for startup restoration."""

    def test_no_fragment_starts_new_game(self) -> None:
        """Test the first-visit path."""
        position, restored = load_initial(FragmentLocation(), shogi.STARTING_SFEN)
        assert restored is False
        assert position.sfen() == shogi.STARTING_SFEN

    def test_valid_fragment_is_restored(self) -> None:
        """Test resuming from a shared link."""
        saved = ShogiPosition()
        saved.make_move(parse_move("7g7f"))

        position, restored = load_initial(
            FragmentLocation(fragment=encode(saved)), shogi.STARTING_SFEN
        )

        assert restored is True
        assert position.serialize() == saved.serialize()

    def test_bad_fragment_falls_back(self) -> None:
        """Test that a corrupt link still yields a playable game."""
        start = "4k4/9/9/9/9/9/9/9/4K4 b - 1"
        position, restored = load_initial(FragmentLocation(fragment="#####"), start)

        assert restored is False
        assert position.sfen() == start
