"""Candidate data models."""

from dataclasses import dataclass
from enum import Enum


class CandidateKind(Enum):
    """Kind of a selectable entry. Values are the print-mode tags."""

    SESSION = "S"
    REPOSITORY = "G"
    BOOKMARK = "B"


@dataclass(frozen=True)
class Candidate:
    """One selectable entry in the launcher list."""

    kind: CandidateKind
    name: str  # tmux session name
    path: str = ""  # directory for repositories and bookmarks

    @property
    def is_session(self) -> bool:
        """Return True for an already running session."""
        return self.kind is CandidateKind.SESSION

    @property
    def searchable_text(self) -> str:
        """Return the text the fuzzy matcher scores against."""
        if self.path:
            return f"{self.name} {self.path}"
        return self.name

    @property
    def identity(self) -> tuple[str, ...]:
        """Return the key used to deduplicate candidates.

        Sessions are unique by name; directories by kind, name and path.
        """
        if self.is_session:
            return (self.kind.value, self.name)
        return (self.kind.value, self.name, self.path)


@dataclass(frozen=True)
class RankedCandidate:
    """A candidate scored against a specific query."""

    candidate: Candidate
    score: int
