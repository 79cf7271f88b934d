"""Tests for the terminal key decoder."""

from io import BytesIO

import pytest

from tsm.ui.keys import Key, KeyEvent, KeyReader


def decode(data: bytes) -> list[KeyEvent]:
    return list(KeyReader(BytesIO(data)))


class TestKeyReader:
    """Tests for KeyReader."""

    def test_printable_text(self) -> None:
        """Test that printable bytes become CHAR events."""
        assert decode(b"ab 1") == KeyEvent.text("ab 1")

    def test_utf8_text(self) -> None:
        """Test that multi-byte characters decode as one event."""
        assert decode("äx".encode()) == [KeyEvent(Key.CHAR, "ä"), KeyEvent(Key.CHAR, "x")]

    @pytest.mark.parametrize(
        "data,key",
        [
            (b"\x03", Key.CANCEL),
            (b"\r", Key.CONFIRM),
            (b"\n", Key.CONFIRM),
            (b"\x7f", Key.BACKSPACE),
            (b"\x08", Key.BACKSPACE),
            (b"\x15", Key.CLEAR),
            (b"\t", Key.TOGGLE_PREVIEW),
            (b"\x0e", Key.DOWN),
            (b"\x10", Key.UP),
        ],
    )
    def test_control_keys(self, data: bytes, key: Key) -> None:
        """Test single-byte control keys."""
        assert decode(data) == [KeyEvent(key)]

    @pytest.mark.parametrize(
        "data,key",
        [
            (b"\x1b[A", Key.UP),
            (b"\x1b[B", Key.DOWN),
            (b"\x1b[H", Key.HOME),
            (b"\x1b[F", Key.END),
            (b"\x1b[1~", Key.HOME),
            (b"\x1b[4~", Key.END),
            (b"\x1b[5~", Key.PAGE_UP),
            (b"\x1b[6~", Key.PAGE_DOWN),
            (b"\x1bOA", Key.UP),
            (b"\x1bOH", Key.HOME),
            (b"\x1bOF", Key.END),
        ],
    )
    def test_escape_sequences(self, data: bytes, key: Key) -> None:
        """Test ANSI cursor and editing key sequences."""
        assert decode(data) == [KeyEvent(key)]

    def test_unknown_sequences_are_consumed(self) -> None:
        """Test that unsupported keys don't leak bytes into the query."""
        # Insert, F5 and Right arrow
        assert decode(b"\x1b[2~\x1b[15~\x1b[Cx") == [KeyEvent(Key.CHAR, "x")]

    def test_stray_escape_keeps_next_key(self) -> None:
        """Test that ESC followed by a plain key doesn't lose the key."""
        assert decode(b"\x1bab") == KeyEvent.text("ab")
        assert decode(b"\x1b\x1b[A") == [KeyEvent(Key.UP)]
        assert decode(b"\x1b\r") == [KeyEvent(Key.CONFIRM)]

    def test_other_control_bytes_ignored(self) -> None:
        """Test that unmapped control bytes produce no event."""
        assert decode(b"\x01\x02y") == [KeyEvent(Key.CHAR, "y")]

    def test_end_of_input_stops(self) -> None:
        """Test that iteration ends at EOF, even mid-sequence."""
        assert decode(b"") == []
        assert decode(b"a\x1b[") == [KeyEvent(Key.CHAR, "a")]
