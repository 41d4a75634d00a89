"""Work Service — verifies author checks, author-change rule and cascade delete.

Tests cover:
    - create: title validated before the author lookup; unknown author rejected
    - update: work, then author existence; new author holding an opinion → 422
    - delete removes the work's opinions
    - get_works_by_author lists only that author's works
"""

import pytest

from what_writers_like.core.errors import (
    SelfOpinionViolationError, ValidationError, WorkNotFoundError, WriterNotFoundError,
)


async def test_create_work(work_service, writer_service):
    author = await writer_service.create_writer("Jane Austen", 1775)
    work = await work_service.create_work("Emma", author.id)
    assert work.author_id == author.id
    assert await work_service.get_work(work.id) == work


async def test_create_validates_title_before_author(work_service):
    with pytest.raises(ValidationError):
        await work_service.create_work("", 999)


async def test_create_unknown_author(work_service):
    with pytest.raises(WriterNotFoundError):
        await work_service.create_work("Emma", 999)


async def test_update_title_and_author(work_service, austen_and_dickens):
    _, dickens, emma, _ = austen_and_dickens
    updated = await work_service.update_work(emma.id, "Emma (1815)", dickens.id)
    assert updated.title == "Emma (1815)"
    assert updated.author_id == dickens.id


async def test_update_missing_work_checked_before_author(work_service):
    with pytest.raises(WorkNotFoundError):
        await work_service.update_work(999, "Emma", 998)


async def test_update_unknown_author(work_service, austen_and_dickens):
    _, _, emma, _ = austen_and_dickens
    with pytest.raises(WriterNotFoundError):
        await work_service.update_work(emma.id, "Emma", 999)


async def test_update_to_author_holding_opinion_rejected(
    work_service, opinion_service, austen_and_dickens,
):
    austen, dickens, emma, _ = austen_and_dickens
    await opinion_service.create_opinion(dickens.id, emma.id, False, "Dull", "Diary")

    with pytest.raises(SelfOpinionViolationError) as exc:
        await work_service.update_work(emma.id, "Emma", dickens.id)
    assert exc.value.source == "application"
    assert (await work_service.get_work(emma.id)).author_id == austen.id


async def test_delete_cascades_opinions(work_service, opinion_service, austen_and_dickens):
    _, dickens, emma, _ = austen_and_dickens
    await opinion_service.create_opinion(dickens.id, emma.id, True, "Sharp", "Letter")

    await work_service.delete_work(emma.id)

    with pytest.raises(WorkNotFoundError):
        await work_service.get_work(emma.id)
    assert await opinion_service.get_opinions_by_writer(dickens.id) == []


async def test_delete_missing_work(work_service):
    with pytest.raises(WorkNotFoundError):
        await work_service.delete_work(123)


async def test_works_by_author(work_service, austen_and_dickens):
    austen, _, emma, _ = austen_and_dickens
    persuasion = await work_service.create_work("Persuasion", austen.id)
    assert await work_service.get_works_by_author(austen.id) == [emma, persuasion]
    assert await work_service.get_works_by_author(999) == []
