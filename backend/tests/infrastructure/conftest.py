"""Store test fixtures — SQL stores over one in-memory SQLite session."""

import pytest

from what_writers_like.infrastructure.opinion_store import SqlOpinionStore
from what_writers_like.infrastructure.work_store import SqlWorkStore
from what_writers_like.infrastructure.writer_store import SqlWriterStore


@pytest.fixture
def writers(test_db):
    return SqlWriterStore(test_db)


@pytest.fixture
def works(test_db):
    return SqlWorkStore(test_db)


@pytest.fixture
def opinions(test_db):
    return SqlOpinionStore(test_db)


@pytest.fixture
async def seeded(writers, works):
    """Austen wrote Emma, Dickens wrote Bleak House."""
    austen = await writers.create("Jane Austen", 1775, 1817, "English novelist")
    dickens = await writers.create("Charles Dickens", 1812, 1870)
    emma = await works.create("Emma", austen.id)
    bleak = await works.create("Bleak House", dickens.id)
    return austen, dickens, emma, bleak
