"""SQL Opinion Store — OpinionStore backed by SQLAlchemy, authoritative invariant check.

Invariants:
    - create()/update() run the self-opinion check inside the INSERT/UPDATE
      statement itself (database trigger), in the same transaction as the write
    - A trigger rejection is raised as SelfOpinionViolationError(source="storage"),
      never as DatabaseError
    - create() of an existing (writer_id, work_id) raises DuplicateOpinionError
    - update() and delete() of a missing pair raise OpinionNotFoundError
    - create() referencing a writer or work that no longer exists raises
      WorkNotFoundError or WriterNotFoundError (work checked first, as in
      the service)

Design Decisions:
    - Core insert()/update() statements instead of session.add(): no identity-map
      interplay with rows the same session already loaded, and rowcount tells
      whether the pair existed
    - Reads use select() rather than session.get(): rows removed by FK cascade
      must not be served from the identity map
"""

from __future__ import annotations

import logging
from dataclasses import asdict

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from what_writers_like.core.domain_types import WorkId, WriterId
from what_writers_like.core.entities import Opinion
from what_writers_like.core.errors import (
    DuplicateOpinionError,
    OpinionNotFoundError,
    ReferentialConflictError,
    SelfOpinionViolationError,
    WorkNotFoundError,
    WritersError,
    WriterNotFoundError,
)
from what_writers_like.infrastructure.database import (
    atomic_write,
    guarded_read,
    is_foreign_key_violation,
    is_self_opinion_violation,
    is_unique_violation,
)
from what_writers_like.models.opinion import OpinionModel
from what_writers_like.models.work import WorkModel
from what_writers_like.models.writer import WriterModel

logger = logging.getLogger(__name__)


def _select_fresh():
    """select(OpinionModel) that overwrites identity-map copies with DB values."""
    return select(OpinionModel).execution_options(populate_existing=True)


class SqlOpinionStore:
    """OpinionStore over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _integrity_mapper(self, opinion: Opinion):
        def _translate(e: IntegrityError):
            if is_self_opinion_violation(e):
                logger.warning(
                    "Storage trigger rejected self-opinion",
                    extra={
                        "entity": "opinion",
                        "entity_id": f"{opinion.writer_id}/{opinion.work_id}",
                    },
                )
                return SelfOpinionViolationError(
                    opinion.writer_id, opinion.work_id, source="storage",
                )
            if is_unique_violation(e):
                return DuplicateOpinionError(opinion.writer_id, opinion.work_id)
            if is_foreign_key_violation(e):
                return ReferentialConflictError(
                    f"Writer {opinion.writer_id} or work {opinion.work_id} no longer exists",
                    "MISSING_REFERENCE",
                )
            return None
        return _translate

    async def _missing_reference(
        self, opinion: Opinion, conflict: ReferentialConflictError,
    ) -> WritersError:
        """Name the row the foreign key found missing."""
        async with guarded_read("resolve_missing_reference"):
            work = await self.db.scalar(
                select(WorkModel.id).where(WorkModel.id == opinion.work_id),
            )
            if work is None:
                return WorkNotFoundError(opinion.work_id)
            writer = await self.db.scalar(
                select(WriterModel.id).where(WriterModel.id == opinion.writer_id),
            )
            if writer is None:
                return WriterNotFoundError(opinion.writer_id)
        return conflict

    async def create(self, opinion: Opinion) -> Opinion:
        try:
            async with atomic_write(
                self.db, "create_opinion", on_integrity=self._integrity_mapper(opinion),
            ):
                await self.db.execute(insert(OpinionModel).values(**asdict(opinion)))
        except ReferentialConflictError as e:
            missing = await self._missing_reference(opinion, e)
            if missing is e:
                raise
            raise missing from e
        return opinion

    async def get_by_key(self, writer_id: WriterId, work_id: WorkId) -> Opinion | None:
        async with guarded_read("get_opinion"):
            result = await self.db.execute(
                _select_fresh().where(
                    OpinionModel.writer_id == writer_id,
                    OpinionModel.work_id == work_id,
                ),
            )
            row = result.scalar_one_or_none()
        return row.to_entity() if row else None

    async def get_by_writer(self, writer_id: WriterId) -> list[Opinion]:
        async with guarded_read("get_opinions_by_writer"):
            result = await self.db.execute(
                _select_fresh().where(OpinionModel.writer_id == writer_id)
                .order_by(OpinionModel.work_id),
            )
        return [row.to_entity() for row in result.scalars().all()]

    async def get_by_work(self, work_id: WorkId) -> list[Opinion]:
        async with guarded_read("get_opinions_by_work"):
            result = await self.db.execute(
                _select_fresh().where(OpinionModel.work_id == work_id)
                .order_by(OpinionModel.writer_id),
            )
        return [row.to_entity() for row in result.scalars().all()]

    async def list(self, limit: int, offset: int) -> list[Opinion]:
        async with guarded_read("list_opinions"):
            result = await self.db.execute(
                _select_fresh()
                .order_by(OpinionModel.writer_id, OpinionModel.work_id)
                .limit(limit).offset(offset),
            )
        return [row.to_entity() for row in result.scalars().all()]

    async def update(self, opinion: Opinion) -> Opinion:
        async with atomic_write(
            self.db, "update_opinion", on_integrity=self._integrity_mapper(opinion),
        ):
            result = await self.db.execute(
                update(OpinionModel)
                .where(
                    OpinionModel.writer_id == opinion.writer_id,
                    OpinionModel.work_id == opinion.work_id,
                )
                .values(
                    sentiment=opinion.sentiment,
                    quote=opinion.quote,
                    source=opinion.source,
                    page=opinion.page,
                    statement_year=opinion.statement_year,
                )
                .execution_options(synchronize_session=False),
            )
            if result.rowcount == 0:
                raise OpinionNotFoundError(opinion.writer_id, opinion.work_id)
        return opinion

    async def delete(self, writer_id: WriterId, work_id: WorkId) -> None:
        async with atomic_write(self.db, "delete_opinion"):
            result = await self.db.execute(
                delete(OpinionModel)
                .where(
                    OpinionModel.writer_id == writer_id,
                    OpinionModel.work_id == work_id,
                )
                .execution_options(synchronize_session=False),
            )
            if result.rowcount == 0:
                raise OpinionNotFoundError(writer_id, work_id)
