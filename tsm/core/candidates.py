"""Assembly of the launcher candidate list."""

from collections.abc import Iterable

import logbook

from tsm.models.candidate import Candidate, CandidateKind
from tsm.models.config import AppConfig

from .deadline import Deadline
from .naming import session_name_from_path
from .paths import expand_paths
from .scanner import scan_repositories
from .tmux_service import TmuxService

log = logbook.Logger(__name__)


def build_candidates(
    sessions: Iterable[str],
    repositories: Iterable[str],
    bookmarks: Iterable[str],
) -> list[Candidate]:
    """Merge sessions, repositories and bookmarks, keeping first occurrences."""
    items = [Candidate(CandidateKind.SESSION, name) for name in sessions]
    items += [
        Candidate(CandidateKind.REPOSITORY, session_name_from_path(path), path)
        for path in repositories
    ]
    items += [
        Candidate(CandidateKind.BOOKMARK, session_name_from_path(path), path)
        for path in bookmarks
    ]

    seen: set[tuple[str, ...]] = set()
    unique = []
    for item in items:
        if item.identity in seen:
            continue
        seen.add(item.identity)
        unique.append(item)
    return unique


def discover_candidates(
    config: AppConfig, tmux: TmuxService, deadline: Deadline
) -> list[Candidate]:
    """Collect every candidate within the discovery deadline."""
    sessions = tmux.list_sessions(timeout=deadline.remaining())
    repositories = scan_repositories(config.scan_config, deadline)
    bookmarks = expand_paths(config.bookmarks)
    candidates = build_candidates(sessions, repositories, bookmarks)
    log.debug(
        "{} candidates ({} sessions, {} repositories, {} bookmarks)",
        len(candidates), len(sessions), len(repositories), len(bookmarks),
    )
    return candidates


def format_candidate_line(candidate: Candidate) -> str:
    """Render a candidate as ``<kind>\\t<name>\\t<path>``."""
    return f"{candidate.kind.value}\t{candidate.name}\t{candidate.path}"
