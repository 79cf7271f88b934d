"""External command surface used to drive tmux."""

import os
import subprocess
from typing import Protocol

import logbook

log = logbook.Logger(__name__)


class CommandError(Exception):
    """Exception raised when an external command fails."""

    def __init__(self, args: list[str], message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.command = list(args)
        self.returncode = returncode


class Shell(Protocol):
    """The two primitives tmux orchestration needs."""

    def run(self, args: list[str], timeout: float | None = None) -> None:
        """Run a command attached to the controlling terminal."""
        ...

    def capture(self, args: list[str], timeout: float | None = None) -> str:
        """Run a command and return its standard output."""
        ...


class ExecShell:
    """Shell backed by real subprocesses."""

    def run(self, args: list[str], timeout: float | None = None) -> None:
        """Run a command inheriting stdin, stdout and stderr."""
        log.debug("Running: {}", " ".join(args))
        try:
            result = subprocess.run(args, env=os.environ.copy(), timeout=timeout)
        except FileNotFoundError:
            raise CommandError(args, f"{args[0]} is not installed or not in PATH")
        except subprocess.TimeoutExpired:
            raise CommandError(args, f"{args[0]} timed out after {timeout}s")

        if result.returncode != 0:
            raise CommandError(
                args,
                f"{' '.join(args)} exited with status {result.returncode}",
                result.returncode,
            )

    def capture(self, args: list[str], timeout: float | None = None) -> str:
        """Run a command and return stdout; stderr is collected, not shown."""
        log.debug("Capturing: {}", " ".join(args))
        try:
            result = subprocess.run(
                args,
                env=os.environ.copy(),
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError:
            raise CommandError(args, f"{args[0]} is not installed or not in PATH")
        except subprocess.TimeoutExpired:
            raise CommandError(args, f"{args[0]} timed out after {timeout}s")

        if result.returncode != 0:
            error_msg = result.stderr.strip() if result.stderr else "Unknown error"
            raise CommandError(args, error_msg, result.returncode)
        return result.stdout
