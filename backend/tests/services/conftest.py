"""Service test fixtures — services wired to in-memory fake stores.

Invariants:
    - Every test gets fresh, empty stores sharing one InMemoryCatalog
    - Services are built exactly as the API wires them, only the stores differ
"""

import pytest

from tests.services.fake_stores import (
    FakeOpinionStore, FakeWorkStore, FakeWriterStore, InMemoryCatalog,
)
from what_writers_like.services.opinion_service import OpinionService
from what_writers_like.services.work_service import WorkService
from what_writers_like.services.writer_service import WriterService


@pytest.fixture
def catalog():
    return InMemoryCatalog()


@pytest.fixture
def writer_store(catalog):
    return FakeWriterStore(catalog)


@pytest.fixture
def work_store(catalog):
    return FakeWorkStore(catalog)


@pytest.fixture
def opinion_store(catalog):
    return FakeOpinionStore(catalog)


@pytest.fixture
def writer_service(writer_store, work_store):
    return WriterService(writer_store, work_store)


@pytest.fixture
def work_service(work_store, writer_store, opinion_store):
    return WorkService(work_store, writer_store, opinion_store)


@pytest.fixture
def opinion_service(opinion_store, writer_store, work_store):
    return OpinionService(opinion_store, writer_store, work_store)


@pytest.fixture
async def austen_and_dickens(writer_service, work_service):
    """Two writers, one work each."""
    austen = await writer_service.create_writer("Jane Austen", 1775, 1817)
    dickens = await writer_service.create_writer("Charles Dickens", 1812, 1870)
    emma = await work_service.create_work("Emma", austen.id)
    bleak = await work_service.create_work("Bleak House", dickens.id)
    return austen, dickens, emma, bleak
