"""Scoped raw-mode handling for the controlling terminal."""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

import logbook

log = logbook.Logger(__name__)

CLEAR_SCREEN = "\x1b[2J\x1b[H"


class RawModeError(Exception):
    """Exception raised when the terminal cannot be put into raw mode."""

    pass


@contextmanager
def raw_mode(stream: TextIO) -> Iterator[None]:
    """Switch the terminal behind stream to unbuffered, unechoed input.

    Signal keys arrive as plain bytes so the selector sees Ctrl-C itself.
    The saved attributes are restored on every exit path.

    Raises:
        RawModeError: If stream is not a terminal or the platform lacks termios.
    """
    if sys.platform == "win32":
        raise RawModeError("raw mode is not supported on Windows")

    import termios

    try:
        if not stream.isatty():
            raise RawModeError("input is not a terminal")
        fd = stream.fileno()
        saved = termios.tcgetattr(fd)
    except (OSError, ValueError, termios.error) as e:
        raise RawModeError(f"cannot read terminal attributes: {e}") from e

    attrs = termios.tcgetattr(fd)
    attrs[3] &= ~(termios.ICANON | termios.ECHO | termios.ISIG | termios.IEXTEN)
    attrs[0] &= ~(termios.IXON | termios.ICRNL)
    attrs[6][termios.VMIN] = 1
    attrs[6][termios.VTIME] = 0
    try:
        termios.tcsetattr(fd, termios.TCSADRAIN, attrs)
    except termios.error as e:
        raise RawModeError(f"cannot enter raw mode: {e}") from e

    log.debug("Terminal switched to raw mode")
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        log.debug("Terminal mode restored")
