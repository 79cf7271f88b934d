"""Expansion of configured paths."""

import os
import re
from pathlib import Path

import logbook

log = logbook.Logger(__name__)

# $NAME or ${NAME} left behind by expandvars when NAME is unset
_UNRESOLVED_VAR = re.compile(r"\$(\w+|\{[^}]*\})")


def expand_path(raw: str) -> str | None:
    """Expand environment references and ``~`` into an absolute path.

    Returns None when a referenced variable is unset or the home directory
    is needed but cannot be resolved.
    """
    path = os.path.expandvars(raw.strip())
    unresolved = _UNRESOLVED_VAR.search(path)
    if unresolved:
        log.warning("Undefined {} in {}, skipping", unresolved.group(0), raw)
        return None
    if path.startswith("~"):
        try:
            home = str(Path.home())
        except RuntimeError:
            log.warning("Cannot resolve home directory, skipping {}", raw)
            return None
        path = os.path.join(home, path[1:].lstrip("/" + os.sep))
    return os.path.abspath(path)


def expand_paths(raw_paths: list[str] | tuple[str, ...]) -> list[str]:
    """Expand every path, dropping the ones that cannot be resolved."""
    expanded = []
    for raw in raw_paths:
        path = expand_path(raw)
        if path is not None:
            expanded.append(path)
    return expanded
