"""Replacement hints for removed tokens."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING

from aperture_core.compare.models import TokenSummary
from aperture_core.tokens.flatten import flatten, index

if TYPE_CHECKING:
    from aperture_core.compare.models import ComparisonChanges
    from aperture_core.tokens.models import TokenNode


def _segments(identity: str) -> Counter[str]:
    return Counter(part.lower() for part in identity.split("/") if part)


def path_overlap(left: str, right: str) -> int:
    """Number of path segments shared by two identities (case-insensitive)."""
    return sum((_segments(left) & _segments(right)).values())


def suggest_one(removed: TokenSummary, candidates: Sequence[TokenSummary]) -> str | None:
    """Pick a replacement for *removed*, or None.

    Exact name match (ignoring case) wins; otherwise the candidate sharing
    the most path segments. Ties go to the earliest candidate.
    """
    own = removed.identity
    pool = [c for c in candidates if c.identity != own]

    wanted = removed.name.lower()
    for candidate in pool:
        if candidate.name.lower() == wanted:
            return candidate.identity

    best: str | None = None
    best_score = 0
    for candidate in pool:
        score = path_overlap(own, candidate.identity)
        if score > best_score:
            best, best_score = candidate.identity, score
    return best


def suggest(
    removed: Sequence[TokenSummary],
    candidates: Sequence[TokenSummary],
) -> dict[str, str]:
    """Map each removed identity to a suggested candidate identity."""
    suggestions: dict[str, str] = {}
    for token in removed:
        match = suggest_one(token, candidates)
        if match is not None:
            suggestions[token.identity] = match
    return suggestions


def candidates_for(changes: ComparisonChanges, new_tree: Sequence[TokenNode]) -> list[TokenSummary]:
    """Added tokens first, then the tokens retained in the new tree."""
    added_keys = {summary.identity for summary in changes.added}
    retained = [
        TokenSummary.from_node(node)
        for key, node in index(flatten(new_tree)).items()
        if key not in added_keys
    ]
    return [*changes.added, *retained]
