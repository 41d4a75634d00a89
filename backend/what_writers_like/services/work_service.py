"""Work Service — validated create/update/delete for works.

Invariants:
    - title is checked before any lookup
    - create: author must exist
    - update: work must exist, then author must exist, then the new author must
      not already hold an opinion about this work
    - delete: work must exist; its opinions go with it (store cascade)
"""

import logging
from dataclasses import replace

from what_writers_like.core.domain_types import WorkId, WriterId
from what_writers_like.core.enforce_entities import validate_work_fields
from what_writers_like.core.entities import Work
from what_writers_like.core.errors import (
    SelfOpinionViolationError, WorkNotFoundError, WriterNotFoundError,
)
from what_writers_like.core.repository_protocols import (
    OpinionStore, WorkStore, WriterStore,
)

logger = logging.getLogger(__name__)


class WorkService:
    """Business rules for works."""

    def __init__(self, works: WorkStore, writers: WriterStore, opinions: OpinionStore):
        self.works = works
        self.writers = writers
        self.opinions = opinions

    async def _require_author(self, author_id: WriterId) -> None:
        if await self.writers.get_by_id(author_id) is None:
            raise WriterNotFoundError(author_id)

    async def create_work(self, title: str, author_id: WriterId) -> Work:
        error = validate_work_fields(title)
        if error:
            raise error
        await self._require_author(author_id)
        work = await self.works.create(title, author_id)
        logger.info(
            f"Work created: {work.title}",
            extra={"entity": "work", "entity_id": str(work.id)},
        )
        return work

    async def get_work(self, work_id: WorkId) -> Work:
        work = await self.works.get_by_id(work_id)
        if work is None:
            raise WorkNotFoundError(work_id)
        return work

    async def get_works_by_author(self, author_id: WriterId) -> list[Work]:
        return await self.works.get_by_author(author_id)

    async def list_works(self, limit: int, offset: int) -> list[Work]:
        return await self.works.list(limit, offset)

    async def update_work(self, work_id: WorkId, title: str, author_id: WriterId) -> Work:
        error = validate_work_fields(title)
        if error:
            raise error
        current = await self.get_work(work_id)
        await self._require_author(author_id)
        if (
            author_id != current.author_id
            and await self.opinions.get_by_key(author_id, work_id) is not None
        ):
            raise SelfOpinionViolationError(author_id, work_id)
        work = await self.works.update(replace(current, title=title, author_id=author_id))
        logger.info(
            "Work updated",
            extra={"entity": "work", "entity_id": str(work_id)},
        )
        return work

    async def delete_work(self, work_id: WorkId) -> None:
        await self.get_work(work_id)
        await self.works.delete(work_id)
        logger.info(
            "Work deleted",
            extra={"entity": "work", "entity_id": str(work_id)},
        )
