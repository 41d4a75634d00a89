"""Fuzzy Search — verifies writer and work search over the store Protocols.

Tests cover:
    - exact and misspelled names match; unrelated queries return nothing
    - bio text matches as well as the name
    - blank query falls back to the plain listing
    - limit/offset apply after ranking
"""

from what_writers_like.services.search import search_works, search_writers


async def test_exact_name_found(writer_store, writer_service):
    await writer_service.create_writer("Jane Austen", 1775)
    await writer_service.create_writer("Charles Dickens", 1812)
    found = await search_writers(writer_store, "Jane Austen", 10, 0)
    assert [w.name for w in found] == ["Jane Austen"]


async def test_misspelled_name_found(writer_store, writer_service):
    await writer_service.create_writer("Jane Austen", 1775)
    found = await search_writers(writer_store, "Jane Austin", 10, 0)
    assert [w.name for w in found] == ["Jane Austen"]


async def test_unrelated_query_finds_nothing(writer_store, writer_service):
    await writer_service.create_writer("Jane Austen", 1775)
    assert await search_writers(writer_store, "Zzzqqx", 10, 0) == []


async def test_bio_matches(writer_store, writer_service):
    await writer_service.create_writer("Mary Ann Evans", 1819, bio="George Eliot")
    found = await search_writers(writer_store, "George Eliot", 10, 0)
    assert [w.name for w in found] == ["Mary Ann Evans"]


async def test_blank_query_lists(writer_store, writer_service):
    await writer_service.create_writer("Jane Austen", 1775)
    await writer_service.create_writer("Charles Dickens", 1812)
    assert len(await search_writers(writer_store, "  ", 10, 0)) == 2
    assert len(await search_writers(writer_store, None, 1, 0)) == 1


async def test_best_match_first_then_paginated(writer_store, writer_service):
    await writer_service.create_writer("Jane Austin", 1900)
    await writer_service.create_writer("Jane Austen", 1775)
    found = await search_writers(writer_store, "Jane Austen", 10, 0)
    assert [w.name for w in found] == ["Jane Austen", "Jane Austin"]
    second = await search_writers(writer_store, "Jane Austen", 1, 1)
    assert [w.name for w in second] == ["Jane Austin"]


async def test_work_title_search(work_store, austen_and_dickens):
    found = await search_works(work_store, "bleak house", 10, 0)
    assert [w.title for w in found] == ["Bleak House"]
