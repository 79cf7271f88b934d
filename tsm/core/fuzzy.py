"""Fuzzy matching and ranking of launcher candidates.

Matching is an ordered, case-insensitive subsequence walk:

- every matched character scores 2 plus the current streak length, so
  contiguous runs beat scattered hits
- a haystack that starts with the query gets a flat prefix bonus
- a query that is not fully consumed rejects the candidate
"""

from collections.abc import Iterable

from tsm.models.candidate import Candidate, RankedCandidate

MATCH_POINTS = 2
PREFIX_BONUS = 5
EMPTY_QUERY_SCORE = 1


def fuzzy_score(query: str, haystack: str) -> int | None:
    """Score query against haystack, or return None when it doesn't match."""
    if not query:
        return EMPTY_QUERY_SCORE

    needle = query.lower()
    position = 0
    score = 0
    streak = 0

    for char in haystack.lower():
        if position == len(needle):
            break
        if char == needle[position]:
            score += MATCH_POINTS + streak
            position += 1
            streak += 1
        else:
            streak = 0

    if position < len(needle):
        return None

    if haystack.lower().startswith(needle):
        score += PREFIX_BONUS
    return score


def filter_and_rank(
    candidates: Iterable[Candidate], query: str, limit: int = 0
) -> list[RankedCandidate]:
    """Score candidates, drop non-matches and order best first.

    Equal scores are ordered by name so the result is deterministic.

    Args:
        candidates: Candidates to rank
        query: Current query text
        limit: Maximum number of results, 0 for no limit
    """
    ranked = []
    for candidate in candidates:
        score = fuzzy_score(query, candidate.searchable_text)
        if score is not None:
            ranked.append(RankedCandidate(candidate=candidate, score=score))

    ranked.sort(
        key=lambda r: (
            -r.score,
            r.candidate.name,
            r.candidate.kind.value,
            r.candidate.path,
        )
    )

    if limit > 0:
        ranked = ranked[:limit]
    return ranked
