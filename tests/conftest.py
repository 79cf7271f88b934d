"""Pytest configuration and fixtures."""

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from tsm.core.shell import CommandError
from tsm.core.tmux_service import TmuxService


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def make_repos(temp_dir: Path) -> Callable[..., Path]:
    """Return a helper that creates ``<rel>/.git`` for each relative path."""

    def make(*relative_paths: str) -> Path:
        for rel in relative_paths:
            (temp_dir / rel / ".git").mkdir(parents=True, exist_ok=True)
        return temp_dir

    return make


class FakeShell:
    """In-memory stand-in for tmux that records every command.

    ``sessions`` is the set of running sessions; ``failing`` holds tmux
    subcommands (e.g. ``"new-session"``) that should fail.
    """

    def __init__(self, sessions: set[str] | None = None) -> None:
        self.sessions = set(sessions or ())
        self.failing: set[str] = set()
        self.calls: list[tuple[str, ...]] = []

    def _execute(self, args: list[str]) -> str:
        self.calls.append(tuple(args))
        subcommand = args[1]
        if subcommand in self.failing:
            raise CommandError(args, f"{subcommand} failed", 1)

        if subcommand == "list-sessions":
            if not self.sessions:
                raise CommandError(args, "no server running", 1)
            return "".join(f"{name}\n" for name in self.sessions)
        if subcommand == "has-session":
            if args[3] not in self.sessions:
                raise CommandError(args, f"can't find session: {args[3]}", 1)
        elif subcommand == "new-session":
            self.sessions.add(args[3])
        elif subcommand in ("attach", "switch-client"):
            if args[3] not in self.sessions:
                raise CommandError(args, f"can't find session: {args[3]}", 1)
        return ""

    def run(self, args: list[str], timeout: float | None = None) -> None:
        self._execute(args)

    def capture(self, args: list[str], timeout: float | None = None) -> str:
        return self._execute(args)


@pytest.fixture
def fake_shell() -> FakeShell:
    """Create a FakeShell with no running sessions."""
    return FakeShell()


@pytest.fixture
def tmux(fake_shell: FakeShell) -> TmuxService:
    """Create a TmuxService backed by the fake shell."""
    return TmuxService(fake_shell)
