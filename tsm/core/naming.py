"""Session name derivation from directory paths."""

import os
import re

FALLBACK_NAME = "session"

_DISALLOWED = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize(text: str) -> str:
    """Reduce text to a tmux-safe identifier.

    Runs of characters outside ``[A-Za-z0-9._-]`` collapse to a single
    ``-``, leading and trailing dashes are dropped, and an empty result
    becomes ``"session"``.
    """
    cleaned = _DISALLOWED.sub("-", text.strip()).strip("-")
    return cleaned or FALLBACK_NAME


def session_name_from_path(path: str) -> str:
    """Build ``<parent>_<base>`` so same-named siblings don't collide.

    e.g. ``/home/u/Code/ivuorinen/a`` -> ``ivuorinen_a``
    """
    path = os.path.normpath(path)
    base = sanitize(os.path.basename(path))
    parent = os.path.basename(os.path.dirname(path))
    if parent in ("", ".", os.sep):
        return base
    return sanitize(parent) + "_" + base
