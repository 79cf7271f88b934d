"""Tmux service for listing, creating and switching sessions."""

import logbook

from tsm.models.candidate import Candidate

from .shell import CommandError, Shell

log = logbook.Logger(__name__)

DEFAULT_TIMEOUT = 6.0


class TmuxError(Exception):
    """Exception raised for tmux operation errors."""

    pass


class TmuxService:
    """Thin wrapper over the tmux commands the launcher needs.

    The shell is injected so tests can record commands instead of
    spawning tmux.
    """

    def __init__(
        self,
        shell: Shell,
        binary: str = "tmux",
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._shell = shell
        self._binary = binary
        self._timeout = timeout

    def _cmd(self, *args: str) -> list[str]:
        return [self._binary, *args]

    def list_sessions(self, timeout: float | None = None) -> list[str]:
        """List running session names, sorted.

        Any failure (no server, tmux missing) means no sessions.
        """
        try:
            output = self._shell.capture(
                self._cmd("list-sessions", "-F", "#S"),
                timeout=self._timeout if timeout is None else timeout,
            )
        except CommandError as e:
            log.debug("No tmux sessions: {}", e)
            return []

        names = {line.strip() for line in output.splitlines() if line.strip()}
        return sorted(names)

    def has_session(self, name: str) -> bool:
        """Check whether a session with this exact name exists."""
        try:
            self._shell.capture(
                self._cmd("has-session", "-t", name), timeout=self._timeout
            )
        except CommandError:
            return False
        return True

    def activate(self, name: str, attached_already: bool) -> None:
        """Switch the current client, or attach when outside tmux."""
        try:
            if attached_already:
                self._shell.run(
                    self._cmd("switch-client", "-t", name), timeout=self._timeout
                )
            else:
                # attach owns the terminal until the user detaches
                self._shell.run(self._cmd("attach", "-t", name))
        except CommandError as e:
            raise TmuxError(f"cannot switch to session {name!r}: {e}") from e

    def create_or_activate(
        self, name: str, directory: str, attached_already: bool
    ) -> None:
        """Activate the session, creating it detached in directory first if needed."""
        if not self.has_session(name):
            log.info("Creating session {} in {}", name, directory)
            try:
                self._shell.run(
                    self._cmd("new-session", "-ds", name, "-c", directory),
                    timeout=self._timeout,
                )
            except CommandError as e:
                raise TmuxError(f"cannot create session {name!r}: {e}") from e
        self.activate(name, attached_already)

    def open(self, candidate: Candidate, attached_already: bool) -> None:
        """Bring the chosen candidate to the foreground."""
        if candidate.is_session:
            self.activate(candidate.name, attached_already)
        else:
            self.create_or_activate(candidate.name, candidate.path, attached_already)
