"""Storage-Level Invariant — verifies the triggers reject self-opinions on their own.

Invariants:
    - Writing straight to the store (no service pre-check) cannot create an
      opinion whose writer authored the work
    - The rejection surfaces as SelfOpinionViolationError(source="storage"),
      never as a generic DatabaseError
    - Reassigning a work to a writer who already holds an opinion about it is
      rejected the same way

Tests cover:
    - insert, update and author change paths
    - the session stays usable after a rejection
"""

from dataclasses import replace

import pytest

from what_writers_like.core.entities import Opinion
from what_writers_like.core.errors import SelfOpinionViolationError


async def test_insert_of_self_opinion_rejected(opinions, seeded):
    austen, _, emma, _ = seeded
    with pytest.raises(SelfOpinionViolationError) as exc:
        await opinions.create(Opinion(austen.id, emma.id, True, "Mine", "Diary"))
    assert exc.value.source == "storage"
    assert exc.value.http_status == 422
    assert await opinions.get_by_key(austen.id, emma.id) is None


async def test_session_usable_after_rejection(opinions, seeded):
    austen, _, emma, bleak = seeded
    with pytest.raises(SelfOpinionViolationError):
        await opinions.create(Opinion(austen.id, emma.id, True, "Mine", "Diary"))

    created = await opinions.create(Opinion(austen.id, bleak.id, True, "Good", "Letters"))
    assert await opinions.get_by_key(austen.id, bleak.id) == created


async def test_update_rejected_after_author_moved_underneath(works, opinions, test_db, seeded):
    """An opinion that became a self-opinion can no longer be rewritten."""
    from sqlalchemy import text

    austen, dickens, emma, _ = seeded
    opinion = await opinions.create(Opinion(dickens.id, emma.id, True, "Sharp", "Letter"))
    # bypass the works trigger to simulate legacy data
    await test_db.execute(text("DROP TRIGGER trg_works_author_not_opinion_holder"))
    await test_db.execute(
        text("UPDATE works SET author_id = :a WHERE id = :w"),
        {"a": dickens.id, "w": emma.id},
    )
    await test_db.commit()

    with pytest.raises(SelfOpinionViolationError) as exc:
        await opinions.update(replace(opinion, quote="Changed my mind"))
    assert exc.value.source == "storage"


async def test_author_change_to_opinion_holder_rejected(works, opinions, seeded):
    austen, dickens, emma, _ = seeded
    await opinions.create(Opinion(dickens.id, emma.id, False, "Slow", "Diary"))

    with pytest.raises(SelfOpinionViolationError) as exc:
        await works.update(replace(emma, author_id=dickens.id))
    assert exc.value.source == "storage"
    assert (await works.get_by_id(emma.id)).author_id == austen.id


async def test_author_change_to_uninvolved_writer_allowed(works, writers, seeded):
    _, _, emma, _ = seeded
    woolf = await writers.create("Virginia Woolf", 1882)
    moved = await works.update(replace(emma, author_id=woolf.id))
    assert moved.author_id == woolf.id
