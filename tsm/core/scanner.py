"""Concurrent discovery of git repositories under the configured roots."""

import os
import queue
import threading

import logbook

from tsm.models.config import ScanConfig

from .deadline import Deadline
from .paths import expand_path

log = logbook.Logger(__name__)

VCS_MARKER = ".git"
QUEUE_SIZE = 256

_DONE = object()


class RootWalker(threading.Thread):
    """Worker thread walking a single root and reporting repositories."""

    def __init__(self, root: str, config: ScanConfig, results: queue.Queue) -> None:
        super().__init__(name=f"scan:{root}", daemon=True)
        self._root = root
        self._exclude = config.exclude
        self._max_depth = config.max_depth
        self._results = results

    def run(self) -> None:
        """Walk the root; traversal errors are skipped per directory."""
        self._walk(self._root, 0)

    def _too_deep(self, depth: int) -> bool:
        return self._max_depth > 0 and depth > self._max_depth

    def _walk(self, directory: str, depth: int) -> None:
        try:
            with os.scandir(directory) as it:
                subdirs = [
                    entry for entry in it
                    if _is_real_dir(entry)
                ]
        except OSError as e:
            log.debug("Skipping {}: {}", directory, e)
            return

        child_depth = depth + 1
        if self._too_deep(child_depth):
            return

        # A repository is reported once and never searched for nested ones
        if any(entry.name == VCS_MARKER for entry in subdirs):
            self._results.put(directory)
            return

        for entry in subdirs:
            if entry.name in self._exclude:
                continue
            self._walk(entry.path, child_depth)


def _is_real_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False


def scan_repositories(config: ScanConfig, deadline: Deadline | None = None) -> list[str]:
    """Find repositories under every root, one worker thread per root.

    Returns deduplicated, sorted absolute paths. When the deadline passes
    before all workers finish, the paths collected so far are returned.
    """
    roots = []
    for raw in config.roots:
        root = expand_path(raw)
        if root is None:
            continue
        if not os.path.isdir(root):
            log.debug("Scan root {} is not a directory", root)
            continue
        roots.append(root)

    results: queue.Queue = queue.Queue(maxsize=QUEUE_SIZE)
    workers = [RootWalker(root, config, results) for root in roots]
    for worker in workers:
        worker.start()

    def close() -> None:
        for worker in workers:
            worker.join()
        results.put(_DONE)

    threading.Thread(target=close, name="scan:closer", daemon=True).start()

    seen: set[str] = set()
    while True:
        try:
            timeout = deadline.remaining() if deadline is not None else None
            item = results.get(timeout=timeout)
        except queue.Empty:
            log.warning("Repository scan timed out, using {} partial results", len(seen))
            break
        if item is _DONE:
            break
        seen.add(item)

    repos = sorted(seen)
    log.debug("Found {} repositories under {} roots", len(repos), len(roots))
    return repos
