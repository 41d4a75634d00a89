"""SQL Work Store — WorkStore backed by SQLAlchemy.

Invariants:
    - create() never chooses an id
    - update() changing author_id to a writer who already holds an opinion about
      the work is rejected by trigger and raised as SelfOpinionViolationError
    - delete() removes the work's opinions with it (ON DELETE CASCADE)
"""

from __future__ import annotations

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from what_writers_like.core.domain_types import SIMILARITY_THRESHOLD, WorkId, WriterId
from what_writers_like.core.entities import Work
from what_writers_like.core.errors import (
    SelfOpinionViolationError, WorkNotFoundError, WriterNotFoundError,
)
from what_writers_like.core.similarity import rank_by_similarity
from what_writers_like.infrastructure.database import (
    atomic_write, guarded_read, is_foreign_key_violation, is_self_opinion_violation,
)
from what_writers_like.models.work import WorkModel

logger = logging.getLogger(__name__)


class SqlWorkStore:
    """WorkStore over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, title: str, author_id: WriterId) -> Work:
        def _missing_author(e: IntegrityError):
            if is_foreign_key_violation(e):
                return WriterNotFoundError(author_id)
            return None

        row = WorkModel(title=title, author_id=author_id)
        async with atomic_write(self.db, "create_work", on_integrity=_missing_author):
            self.db.add(row)
            await self.db.flush()
        return row.to_entity()

    async def get_by_id(self, work_id: WorkId) -> Work | None:
        async with guarded_read("get_work"):
            row = await self.db.get(WorkModel, work_id)
        return row.to_entity() if row else None

    async def get_by_author(self, author_id: WriterId) -> list[Work]:
        async with guarded_read("get_works_by_author"):
            result = await self.db.execute(
                select(WorkModel).where(WorkModel.author_id == author_id)
                .order_by(WorkModel.id),
            )
        return [row.to_entity() for row in result.scalars().all()]

    async def list(self, limit: int, offset: int) -> list[Work]:
        async with guarded_read("list_works"):
            result = await self.db.execute(
                select(WorkModel).order_by(WorkModel.id).limit(limit).offset(offset),
            )
        return [row.to_entity() for row in result.scalars().all()]

    async def search(self, query: str, limit: int, offset: int) -> list[Work]:
        """Title similarity, same threshold and ordering as writer search."""
        async with guarded_read("search_works"):
            if self.db.get_bind().dialect.name == "postgresql":
                score = func.similarity(WorkModel.title, query)
                result = await self.db.execute(
                    select(WorkModel)
                    .where(score > SIMILARITY_THRESHOLD)
                    .order_by(score.desc(), WorkModel.id)
                    .limit(limit).offset(offset),
                )
                return [row.to_entity() for row in result.scalars().all()]
            result = await self.db.execute(select(WorkModel).order_by(WorkModel.id))
            works = [row.to_entity() for row in result.scalars().all()]
        ranked = rank_by_similarity(query, works, lambda w: (w.title,))
        return [work for work, _ in ranked[offset:offset + limit]]

    async def update(self, work: Work) -> Work:
        def _translate(e: IntegrityError):
            if is_self_opinion_violation(e):
                logger.warning(
                    "Storage rejected author change creating a self-opinion",
                    extra={"entity": "work", "entity_id": str(work.id)},
                )
                return SelfOpinionViolationError(work.author_id, work.id, source="storage")
            if is_foreign_key_violation(e):
                return WriterNotFoundError(work.author_id)
            return None

        async with atomic_write(self.db, "update_work", on_integrity=_translate):
            row = await self.db.get(WorkModel, work.id)
            if row is None:
                raise WorkNotFoundError(work.id)
            row.title = work.title
            row.author_id = work.author_id
            await self.db.flush()
        return row.to_entity()

    async def delete(self, work_id: WorkId) -> None:
        async with atomic_write(self.db, "delete_work"):
            result = await self.db.execute(
                delete(WorkModel).where(WorkModel.id == work_id),
            )
            if result.rowcount == 0:
                raise WorkNotFoundError(work_id)
