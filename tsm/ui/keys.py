"""Keystroke events and an ANSI terminal decoder."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import BinaryIO

import logbook

log = logbook.Logger(__name__)


class Key(Enum):
    """Abstract keystrokes understood by the selector."""

    CHAR = auto()
    BACKSPACE = auto()
    CLEAR = auto()
    UP = auto()
    DOWN = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    TOGGLE_PREVIEW = auto()
    CONFIRM = auto()
    CANCEL = auto()


@dataclass(frozen=True)
class KeyEvent:
    """A decoded keystroke; ``char`` is set only for Key.CHAR."""

    key: Key
    char: str = ""

    @classmethod
    def text(cls, text: str) -> list["KeyEvent"]:
        """Build one CHAR event per character of text."""
        return [cls(Key.CHAR, c) for c in text]


# Control bytes
CTRL_C = 0x03
BACKSPACE_BS = 0x08
TAB = 0x09
LF = 0x0A
CR = 0x0D
CTRL_N = 0x0E
CTRL_P = 0x10
CTRL_U = 0x15
ESC = 0x1B
DEL = 0x7F

CONTROL_KEYS = {
    CTRL_C: Key.CANCEL,
    BACKSPACE_BS: Key.BACKSPACE,
    DEL: Key.BACKSPACE,
    TAB: Key.TOGGLE_PREVIEW,
    LF: Key.CONFIRM,
    CR: Key.CONFIRM,
    CTRL_N: Key.DOWN,
    CTRL_P: Key.UP,
    CTRL_U: Key.CLEAR,
}

# Final byte of ESC [ X and ESC O X sequences
CURSOR_KEYS = {
    ord("A"): Key.UP,
    ord("B"): Key.DOWN,
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}

# Numeric parameter of ESC [ n ~ sequences
TILDE_KEYS = {
    "1": Key.HOME,
    "7": Key.HOME,
    "4": Key.END,
    "8": Key.END,
    "5": Key.PAGE_UP,
    "6": Key.PAGE_DOWN,
}


class KeyReader:
    """Decode keystrokes from a byte stream in a terminal's raw mode.

    Iteration ends when the stream reaches end of file. Unknown escape
    sequences are consumed and ignored.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def __iter__(self) -> Iterator[KeyEvent]:
        while True:
            byte = self._read()
            if byte is None:
                return
            event = self._decode(byte)
            if event is not None:
                yield event

    def _read(self) -> int | None:
        data = self._stream.read(1)
        if not data:
            return None
        return data[0]

    def _decode(self, byte: int) -> KeyEvent | None:
        if byte in CONTROL_KEYS:
            return KeyEvent(CONTROL_KEYS[byte])
        if byte == ESC:
            return self._decode_escape()
        if byte < 0x20:
            return None
        char = self._decode_utf8(byte)
        if char and char.isprintable():
            return KeyEvent(Key.CHAR, char)
        return None

    def _decode_escape(self) -> KeyEvent | None:
        introducer = self._read()
        if introducer == ord("O"):
            final = self._read()
            key = CURSOR_KEYS.get(final) if final is not None else None
            return KeyEvent(key) if key else None
        if introducer is None:
            return None
        if introducer != ord("["):
            # Stray ESC or Alt+key: keep the key that followed
            return self._decode(introducer)

        params = ""
        while True:
            byte = self._read()
            if byte is None:
                return None
            if 0x30 <= byte <= 0x3F:  # parameter bytes, e.g. digits and ';'
                params += chr(byte)
                continue
            break

        if byte == ord("~"):
            key = TILDE_KEYS.get(params.split(";")[0])
        else:
            key = CURSOR_KEYS.get(byte)
        if key is None:
            log.debug("Ignoring escape sequence ESC[{}{}", params, chr(byte))
            return None
        return KeyEvent(key)

    def _decode_utf8(self, lead: int) -> str:
        if lead < 0x80:
            return chr(lead)
        if lead >= 0xF0:
            extra = 3
        elif lead >= 0xE0:
            extra = 2
        elif lead >= 0xC0:
            extra = 1
        else:
            return ""
        data = bytearray([lead])
        for _ in range(extra):
            byte = self._read()
            if byte is None:
                break
            data.append(byte)
        return data.decode("utf-8", errors="ignore")
