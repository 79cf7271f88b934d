"""Core services for tsm."""

from .fuzzy import filter_and_rank, fuzzy_score
from .naming import sanitize, session_name_from_path
from .scanner import scan_repositories
from .shell import CommandError, ExecShell, Shell
from .tmux_service import TmuxError, TmuxService

__all__ = [
    "filter_and_rank",
    "fuzzy_score",
    "sanitize",
    "session_name_from_path",
    "scan_repositories",
    "CommandError",
    "ExecShell",
    "Shell",
    "TmuxError",
    "TmuxService",
]
