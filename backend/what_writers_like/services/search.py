"""Fuzzy Search — read-only similarity search over writers and works.

Invariants:
    - Blank or missing query: plain store listing (id order), no ranking
    - Any other query: store similarity search; never a substring fallback
    - Does not pass through the validation services
"""

from what_writers_like.core.entities import Work, Writer
from what_writers_like.core.repository_protocols import WorkStore, WriterStore


def _is_blank(query: str | None) -> bool:
    return query is None or not query.strip()


async def search_writers(
    writers: WriterStore, query: str | None, limit: int, offset: int,
) -> list[Writer]:
    """Rank writers by name/bio similarity to `query`."""
    if _is_blank(query):
        return await writers.list(limit, offset)
    return await writers.search(query, limit, offset)


async def search_works(
    works: WorkStore, query: str | None, limit: int, offset: int,
) -> list[Work]:
    """Rank works by title similarity to `query`."""
    if _is_blank(query):
        return await works.list(limit, offset)
    return await works.search(query, limit, offset)
