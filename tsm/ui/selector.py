"""Interactive candidate selection.

The selector is a small state machine driven by KeyEvents: it owns the
query, the highlighted row and the preview flag, re-ranks the candidates
after every keystroke, and ends exactly once, either confirmed with a
candidate or cancelled.
"""

import sys
from collections.abc import Iterable
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

import logbook

from tsm.core.fuzzy import filter_and_rank
from tsm.models.candidate import Candidate, RankedCandidate

from .keys import Key, KeyEvent, KeyReader
from .terminal import CLEAR_SCREEN, RawModeError, raw_mode

log = logbook.Logger(__name__)

PAGE_LIMIT = 30
PAGE_STEP = 5  # PgUp/PgDn step

HELP_LINE = (
    "tsm — filter (↑/↓, Ctrl-N/P, Enter, Backspace, Ctrl-U clear, "
    "Tab preview, Home/End, PgUp/PgDn, Ctrl-C cancel)"
)


class SelectionError(Exception):
    """Exception raised when no selection could be read from the user."""

    pass


class Outcome(Enum):
    """Terminal states of the selection loop."""

    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass
class SelectionState:
    """Mutable state of one selection loop."""

    query: str = ""
    index: int = 0
    preview: bool = False


def format_row(ranked: RankedCandidate, prefix: str) -> str:
    """Format one list row: marker, kind, padded name, path."""
    candidate = ranked.candidate
    return f"{prefix}{candidate.kind.value:<3} {candidate.name:<24} {candidate.path}".rstrip()


class Selector:
    """Keystroke-driven candidate picker."""

    def __init__(
        self,
        candidates: list[Candidate],
        out: TextIO,
        page_limit: int = PAGE_LIMIT,
    ) -> None:
        self._candidates = candidates
        self._out = out
        self._page_limit = page_limit
        self.state = SelectionState()
        self.selected: Candidate | None = None

    def view(self) -> list[RankedCandidate]:
        """Rank the candidates against the current query."""
        return filter_and_rank(self._candidates, self.state.query, self._page_limit)

    def _clamp(self, view_size: int) -> None:
        if view_size == 0:
            self.state.index = 0
        else:
            self.state.index = max(0, min(self.state.index, view_size - 1))

    def handle(self, event: KeyEvent) -> Outcome | None:
        """Apply one keystroke; return an Outcome when the loop ends."""
        state = self.state
        key = event.key

        if key is Key.CANCEL:
            return Outcome.CANCELLED

        if key is Key.CONFIRM:
            view = self.view()
            if not view:
                return None
            self._clamp(len(view))
            self.selected = view[state.index].candidate
            return Outcome.CONFIRMED

        if key is Key.CHAR:
            state.query += event.char
        elif key is Key.BACKSPACE:
            state.query = state.query[:-1]
        elif key is Key.CLEAR:
            state.query = ""
            state.index = 0
        elif key is Key.UP:
            state.index -= 1
        elif key is Key.DOWN:
            state.index += 1
        elif key is Key.HOME:
            state.index = 0
        elif key is Key.END:
            state.index = len(self.view()) - 1
        elif key is Key.PAGE_UP:
            state.index -= PAGE_STEP
        elif key is Key.PAGE_DOWN:
            state.index += PAGE_STEP
        elif key is Key.TOGGLE_PREVIEW:
            state.preview = not state.preview

        self._clamp(len(self.view()))
        return None

    def render(self) -> None:
        """Redraw the whole screen for the current state."""
        view = self.view()
        self._clamp(len(view))
        lines = [HELP_LINE, f"> {self.state.query}", ""]
        for i, ranked in enumerate(view):
            prefix = "➤ " if i == self.state.index else "  "
            lines.append(format_row(ranked, prefix))

        if self.state.preview and view:
            lines.extend(self._preview_lines(view[self.state.index].candidate))

        self._out.write(CLEAR_SCREEN + "\n".join(lines) + "\n")
        self._out.flush()

    def _preview_lines(self, candidate: Candidate) -> list[str]:
        lines = ["", "--- preview ---"]
        if candidate.is_session:
            lines.append(f'Action : switch to session "{candidate.name}"')
        else:
            lines.append(
                f'Action : new-session -ds "{candidate.name}" -c "{candidate.path}"; '
                "switch/attach"
            )
        if candidate.path:
            lines.append(f"Path   : {candidate.path}")
        return lines

    def run(self, events: Iterable[KeyEvent]) -> Candidate | None:
        """Drive the loop until confirmation or cancellation.

        Returns:
            The chosen candidate, or None if the user cancelled.

        Raises:
            SelectionError: If the events run out first.
        """
        self.state = SelectionState()
        self.selected = None
        self.render()

        for event in events:
            outcome = self.handle(event)
            if outcome is Outcome.CANCELLED:
                log.debug("Selection cancelled")
                return None
            if outcome is Outcome.CONFIRMED:
                log.debug("Selected {}", self.selected)
                return self.selected
            self.render()

        raise SelectionError("input closed before a selection was made")


def prompt_once(
    candidates: list[Candidate], stdin: TextIO, stdout: TextIO
) -> Candidate | None:
    """Line-based selection for terminals without raw mode.

    Reads one query line, lists numbered matches and reads a number. An
    empty answer cancels.
    """
    stdout.write("Query: ")
    stdout.flush()
    line = stdin.readline()
    if not line:
        raise SelectionError("no input")

    view = filter_and_rank(candidates, line.strip(), PAGE_LIMIT)
    if not view:
        stdout.write("no matches\n")
        return None

    for i, ranked in enumerate(view, start=1):
        stdout.write(format_row(ranked, f"{i:2d}) ") + "\n")

    stdout.write("Pick number: ")
    stdout.flush()
    answer = stdin.readline()
    if not answer:
        raise SelectionError("no input")
    answer = answer.strip()
    if not answer:
        return None

    try:
        number = int(answer)
    except ValueError:
        raise SelectionError("invalid selection")
    if number <= 0 or number > len(view):
        raise SelectionError("invalid selection")
    return view[number - 1].candidate


def select_candidate(
    candidates: list[Candidate],
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> Candidate | None:
    """Let the user pick a candidate, interactively when the terminal allows."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    with ExitStack() as stack:
        try:
            stack.enter_context(raw_mode(stdin))
        except RawModeError as e:
            log.info("Using line prompt: {}", e)
            return prompt_once(candidates, stdin, stdout)

        keys_in = stack.enter_context(
            open(stdin.fileno(), "rb", buffering=0, closefd=False)
        )
        try:
            return Selector(candidates, stdout).run(KeyReader(keys_in))
        except OSError as e:
            raise SelectionError(f"cannot read from terminal: {e}") from e
