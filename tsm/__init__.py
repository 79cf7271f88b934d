"""tsm: fuzzy launcher for tmux sessions, git repositories and bookmarks."""

__version__ = "0.1.0"
