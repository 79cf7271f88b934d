"""Data models for tsm."""

from .candidate import Candidate, CandidateKind, RankedCandidate
from .config import AppConfig, ConfigError, ScanConfig

__all__ = [
    "Candidate",
    "CandidateKind",
    "RankedCandidate",
    "AppConfig",
    "ConfigError",
    "ScanConfig",
]
