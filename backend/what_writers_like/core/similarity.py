"""Trigram Similarity — pg_trgm-compatible string similarity and ranking.

Invariants:
    - Pure functions: no IO, no async, no DB
    - similarity() is symmetric, in [0, 1], 1.0 for identical strings
      (after case folding), 0.0 when no trigram is shared
    - rank_by_similarity() keeps a candidate only if its best score is
      strictly greater than the threshold; order is score desc, then input order

Design Decisions:
    - Same trigram extraction as PostgreSQL pg_trgm (lower-case, alphanumeric
      words, two leading blanks and one trailing blank per word) so the SQL path
      and the Python path rank identically
"""

import re
from typing import Callable, Iterable, TypeVar

from what_writers_like.core.domain_types import SIMILARITY_THRESHOLD

T = TypeVar("T")

_WORD_RE = re.compile(r"[^\W_]+", re.UNICODE)


def trigrams(text: str) -> frozenset[str]:
    """Set of padded word trigrams of `text`."""
    grams: set[str] = set()
    for word in _WORD_RE.findall(text.lower()):
        padded = f"  {word} "
        for i in range(len(padded) - 2):
            grams.add(padded[i:i + 3])
    return frozenset(grams)


def similarity(a: str | None, b: str | None) -> float:
    """Jaccard index of the two trigram sets. None counts as no text."""
    if not a or not b:
        return 0.0
    ta, tb = trigrams(a), trigrams(b)
    union = ta | tb
    if not union:
        return 0.0
    return len(ta & tb) / len(union)


def best_score(query: str, fields: Iterable[str | None]) -> float:
    """Highest similarity between `query` and any of `fields`."""
    return max((similarity(query, f) for f in fields), default=0.0)


def rank_by_similarity(
    query: str,
    candidates: Iterable[T],
    fields: Callable[[T], Iterable[str | None]],
    threshold: float = SIMILARITY_THRESHOLD,
) -> list[tuple[T, float]]:
    """Score every candidate, drop those at or below threshold, sort best first.

    `fields` extracts the texts to compare (e.g. name and bio); the candidate's
    score is the best of them.
    """
    scored = []
    for candidate in candidates:
        score = best_score(query, fields(candidate))
        if score > threshold:
            scored.append((candidate, score))
    # sorted() is stable: equal scores keep input order
    return sorted(scored, key=lambda pair: pair[1], reverse=True)
