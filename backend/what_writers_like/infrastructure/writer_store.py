"""SQL Writer Store — WriterStore backed by SQLAlchemy, including fuzzy search.

Invariants:
    - create() never chooses an id: the INSERT gets it from the database
    - search() includes a writer iff similarity(query, name) > 0.3 or
      similarity(query, bio) > 0.3; order is best score desc, then id asc;
      limit/offset apply after ranking
    - delete() of a writer that still has works raises WriterHasWorksError
      (works.author_id is ON DELETE RESTRICT)

Design Decisions:
    - PostgreSQL ranks in SQL with pg_trgm similarity(); other dialects fetch
      rows in id order and rank with core/similarity.py (same trigram measure)
"""

from __future__ import annotations

import logging

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from what_writers_like.core.domain_types import SIMILARITY_THRESHOLD, WriterId
from what_writers_like.core.entities import Writer
from what_writers_like.core.errors import WriterHasWorksError, WriterNotFoundError
from what_writers_like.core.similarity import rank_by_similarity
from what_writers_like.infrastructure.database import (
    atomic_write, guarded_read, is_foreign_key_violation,
)
from what_writers_like.models.writer import WriterModel

logger = logging.getLogger(__name__)


class SqlWriterStore:
    """WriterStore over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, name: str, birth_year: int,
        death_year: int | None = None, bio: str | None = None,
    ) -> Writer:
        row = WriterModel(
            name=name, birth_year=birth_year, death_year=death_year, bio=bio,
        )
        async with atomic_write(self.db, "create_writer"):
            self.db.add(row)
            await self.db.flush()
        return row.to_entity()

    async def get_by_id(self, writer_id: WriterId) -> Writer | None:
        async with guarded_read("get_writer"):
            row = await self.db.get(WriterModel, writer_id)
        return row.to_entity() if row else None

    async def list(self, limit: int, offset: int) -> list[Writer]:
        async with guarded_read("list_writers"):
            result = await self.db.execute(
                select(WriterModel).order_by(WriterModel.id)
                .limit(limit).offset(offset),
            )
        return [row.to_entity() for row in result.scalars().all()]

    async def search(self, query: str, limit: int, offset: int) -> list[Writer]:
        async with guarded_read("search_writers"):
            if self.db.get_bind().dialect.name == "postgresql":
                return await self._search_trigram_sql(query, limit, offset)
            result = await self.db.execute(
                select(WriterModel).order_by(WriterModel.id),
            )
            writers = [row.to_entity() for row in result.scalars().all()]
        ranked = rank_by_similarity(query, writers, lambda w: (w.name, w.bio))
        return [writer for writer, _ in ranked[offset:offset + limit]]

    async def _search_trigram_sql(self, query: str, limit: int, offset: int) -> list[Writer]:
        name_score = func.similarity(WriterModel.name, query)
        bio_score = func.coalesce(func.similarity(WriterModel.bio, query), 0.0)
        result = await self.db.execute(
            select(WriterModel)
            .where(or_(
                name_score > SIMILARITY_THRESHOLD,
                bio_score > SIMILARITY_THRESHOLD,
            ))
            .order_by(func.greatest(name_score, bio_score).desc(), WriterModel.id)
            .limit(limit).offset(offset),
        )
        return [row.to_entity() for row in result.scalars().all()]

    async def update(self, writer: Writer) -> Writer:
        async with atomic_write(self.db, "update_writer"):
            row = await self.db.get(WriterModel, writer.id)
            if row is None:
                raise WriterNotFoundError(writer.id)
            row.name = writer.name
            row.birth_year = writer.birth_year
            row.death_year = writer.death_year
            row.bio = writer.bio
            await self.db.flush()
        return row.to_entity()

    async def delete(self, writer_id: WriterId) -> None:
        def _restricted(e: IntegrityError):
            if is_foreign_key_violation(e):
                return WriterHasWorksError(writer_id)
            return None

        async with atomic_write(self.db, "delete_writer", on_integrity=_restricted):
            result = await self.db.execute(
                delete(WriterModel).where(WriterModel.id == writer_id),
            )
            if result.rowcount == 0:
                raise WriterNotFoundError(writer_id)
