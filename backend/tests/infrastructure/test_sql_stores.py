"""SQL Stores — verifies persistence, ordering and referential behavior on SQLite.

Tests cover:
    - ids issued by the database, increasing per table
    - RESTRICT on writer delete while works exist → WriterHasWorksError
    - CASCADE: deleting a work or a writer removes their opinions
    - missing rows on update/delete → *NotFoundError
    - duplicate (writer, work) pair → DuplicateOpinionError
    - unexpected integrity failures become DatabaseError
    - ids of deleted rows are never issued again
    - an opinion naming a vanished writer or work → the matching NotFound
"""

import pytest

from what_writers_like.core.entities import Opinion, Writer
from what_writers_like.core.errors import (
    DatabaseError,
    DuplicateOpinionError,
    OpinionNotFoundError,
    WorkNotFoundError,
    WriterHasWorksError,
    WriterNotFoundError,
)


async def test_ids_issued_by_database(writers):
    first = await writers.create("Jane Austen", 1775)
    second = await writers.create("Charles Dickens", 1812)
    assert first.id >= 1
    assert second.id > first.id


async def test_deleted_writer_id_not_reissued(writers):
    first = await writers.create("Jane Austen", 1775)
    last = await writers.create("Charles Dickens", 1812)
    await writers.delete(last.id)

    after = await writers.create("Virginia Woolf", 1882)

    assert after.id > last.id > first.id
    assert await writers.get_by_id(last.id) is None


async def test_deleted_work_id_not_reissued(works, seeded):
    _, _, _, bleak = seeded
    await works.delete(bleak.id)

    again = await works.create("Hard Times", bleak.author_id)

    assert again.id > bleak.id


async def test_writer_round_trip_and_update(writers):
    created = await writers.create("Jane Austen", 1775, 1817, "Novelist")
    assert await writers.get_by_id(created.id) == created

    changed = await writers.update(
        Writer(created.id, "Jane Austen", 1775, None, "Novelist"),
    )
    assert changed.death_year is None
    assert (await writers.get_by_id(created.id)).death_year is None


async def test_update_missing_writer(writers):
    with pytest.raises(WriterNotFoundError):
        await writers.update(Writer(999, "Nobody", 1900))


async def test_writer_list_paginates_by_id(writers):
    for i in range(4):
        await writers.create(f"Writer {i}", 1900 + i)
    page = await writers.list(limit=2, offset=2)
    assert [w.name for w in page] == ["Writer 2", "Writer 3"]


async def test_work_for_missing_author(works):
    with pytest.raises(WriterNotFoundError):
        await works.create("Orphan", 999)


async def test_works_by_author(works, seeded):
    austen, _, emma, _ = seeded
    persuasion = await works.create("Persuasion", austen.id)
    assert await works.get_by_author(austen.id) == [emma, persuasion]


async def test_writer_delete_restricted_by_works(writers, seeded):
    austen, _, _, _ = seeded
    with pytest.raises(WriterHasWorksError):
        await writers.delete(austen.id)
    assert await writers.get_by_id(austen.id) is not None


async def test_work_delete_cascades_opinions(works, opinions, seeded):
    _, dickens, emma, _ = seeded
    await opinions.create(Opinion(dickens.id, emma.id, True, "Sharp", "Letter"))

    await works.delete(emma.id)

    assert await works.get_by_id(emma.id) is None
    assert await opinions.get_by_key(dickens.id, emma.id) is None


async def test_writer_delete_cascades_opinions(writers, works, opinions):
    reader = await writers.create("Virginia Woolf", 1882)
    author = await writers.create("Jane Austen", 1775)
    emma = await works.create("Emma", author.id)
    await opinions.create(Opinion(reader.id, emma.id, True, "Perfect", "Essays"))

    await writers.delete(reader.id)

    assert await opinions.get_by_work(emma.id) == []


async def test_delete_missing_rows(writers, works, opinions):
    with pytest.raises(WriterNotFoundError):
        await writers.delete(999)
    with pytest.raises(WorkNotFoundError):
        await works.delete(999)
    with pytest.raises(OpinionNotFoundError):
        await opinions.delete(999, 998)


async def test_duplicate_opinion(opinions, seeded):
    austen, _, _, bleak = seeded
    await opinions.create(Opinion(austen.id, bleak.id, True, "Good", "Letters"))
    with pytest.raises(DuplicateOpinionError):
        await opinions.create(Opinion(austen.id, bleak.id, False, "Bad", "Letters"))
    assert (await opinions.get_by_key(austen.id, bleak.id)).quote == "Good"


async def test_opinion_for_missing_writer(opinions, seeded):
    _, _, emma, _ = seeded
    with pytest.raises(WriterNotFoundError) as exc:
        await opinions.create(Opinion(999, emma.id, True, "Q", "S"))
    assert exc.value.http_status == 404
    assert await opinions.get_by_work(emma.id) == []


async def test_opinion_for_missing_work(opinions, seeded):
    austen = seeded[0]
    with pytest.raises(WorkNotFoundError):
        await opinions.create(Opinion(austen.id, 999, True, "Q", "S"))


async def test_opinion_for_work_deleted_meanwhile(opinions, works, seeded):
    """The work vanishes between the caller's lookup and the insert."""
    austen, _, _, bleak = seeded
    await works.delete(bleak.id)
    with pytest.raises(WorkNotFoundError):
        await opinions.create(Opinion(austen.id, bleak.id, True, "Q", "S"))


async def test_opinion_update_and_missing(opinions, seeded):
    austen, _, _, bleak = seeded
    original = Opinion(austen.id, bleak.id, True, "Good", "Letters", "4", 1853)
    await opinions.create(original)
    revised = Opinion(austen.id, bleak.id, False, "Tiresome", "Letters", None, 1853)

    assert await opinions.update(revised) == revised
    assert await opinions.get_by_key(austen.id, bleak.id) == revised

    with pytest.raises(OpinionNotFoundError):
        await opinions.update(Opinion(austen.id, 999, True, "Q", "S"))


async def test_opinion_listings_ordered(opinions, writers, seeded):
    austen, dickens, emma, bleak = seeded
    woolf = await writers.create("Virginia Woolf", 1882)
    a = await opinions.create(Opinion(austen.id, bleak.id, True, "Good", "Letters"))
    w1 = await opinions.create(Opinion(woolf.id, emma.id, True, "Perfect", "Essays"))
    w2 = await opinions.create(Opinion(woolf.id, bleak.id, False, "Crowded", "Diary"))
    d = await opinions.create(Opinion(dickens.id, emma.id, False, "Slow", "Diary"))

    assert await opinions.get_by_writer(woolf.id) == [w1, w2]
    assert await opinions.get_by_work(emma.id) == [d, w1]
    assert await opinions.list(limit=10, offset=0) == [a, d, w1, w2]


async def test_unexpected_integrity_failure_is_database_error(writers):
    with pytest.raises(DatabaseError) as exc:
        await writers.create(None, 1775)
    assert exc.value.http_status == 503
    assert exc.value.operation == "create_writer"
