"""Opinion Service — validated create/update/delete for opinions.

Invariants:
    - Check order (create): quote, source, work exists, not a self-opinion,
      writer exists, then the store write
    - Check order (update): quote, source, work exists, not a self-opinion,
      opinion exists, then the store write
    - The self-opinion check here is the fast path; the store re-checks it
      inside the write (see infrastructure/opinion_store.py)
    - The self-opinion check runs before writer existence, so a caller never
      learns whether an unrelated writer id is valid once the rule already fails

Design Decisions:
    - Update re-validates the invariant even though the key is immutable: the
      work's author may have changed since the opinion was created
"""

import logging
from dataclasses import replace

from what_writers_like.core.domain_types import UNSET, Patch, WorkId, WriterId, resolve_patch
from what_writers_like.core.enforce_entities import (
    check_not_self_opinion, validate_opinion_fields,
)
from what_writers_like.core.entities import Opinion, Work
from what_writers_like.core.errors import (
    OpinionNotFoundError, WorkNotFoundError, WriterNotFoundError,
)
from what_writers_like.core.repository_protocols import (
    OpinionStore, WorkStore, WriterStore,
)

logger = logging.getLogger(__name__)


class OpinionService:
    """Business rules for opinions."""

    def __init__(self, opinions: OpinionStore, writers: WriterStore, works: WorkStore):
        self.opinions = opinions
        self.writers = writers
        self.works = works

    async def _checked_work(self, writer_id: WriterId, work_id: WorkId) -> Work:
        """Resolve the work and apply the self-opinion rule."""
        work = await self.works.get_by_id(work_id)
        if work is None:
            raise WorkNotFoundError(work_id)
        error = check_not_self_opinion(work, writer_id)
        if error:
            raise error
        return work

    async def create_opinion(
        self,
        writer_id: WriterId,
        work_id: WorkId,
        sentiment: bool,
        quote: str,
        source: str,
        page: str | None = None,
        statement_year: int | None = None,
    ) -> Opinion:
        error = validate_opinion_fields(quote, source)
        if error:
            raise error
        await self._checked_work(writer_id, work_id)
        if await self.writers.get_by_id(writer_id) is None:
            raise WriterNotFoundError(writer_id)

        opinion = await self.opinions.create(Opinion(
            writer_id=writer_id,
            work_id=work_id,
            sentiment=sentiment,
            quote=quote,
            source=source,
            page=page,
            statement_year=statement_year,
        ))
        logger.info(
            "Opinion created",
            extra={"entity": "opinion", "entity_id": f"{writer_id}/{work_id}"},
        )
        return opinion

    async def get_opinion(self, writer_id: WriterId, work_id: WorkId) -> Opinion:
        opinion = await self.opinions.get_by_key(writer_id, work_id)
        if opinion is None:
            raise OpinionNotFoundError(writer_id, work_id)
        return opinion

    async def get_opinions_by_writer(self, writer_id: WriterId) -> list[Opinion]:
        return await self.opinions.get_by_writer(writer_id)

    async def get_opinions_by_work(self, work_id: WorkId) -> list[Opinion]:
        return await self.opinions.get_by_work(work_id)

    async def list_opinions(self, limit: int, offset: int) -> list[Opinion]:
        return await self.opinions.list(limit, offset)

    async def update_opinion(
        self,
        writer_id: WriterId,
        work_id: WorkId,
        sentiment: bool,
        quote: str,
        source: str,
        page: Patch[str] = UNSET,
        statement_year: Patch[int] = UNSET,
    ) -> Opinion:
        error = validate_opinion_fields(quote, source)
        if error:
            raise error
        await self._checked_work(writer_id, work_id)
        current = await self.get_opinion(writer_id, work_id)

        opinion = await self.opinions.update(replace(
            current,
            sentiment=sentiment,
            quote=quote,
            source=source,
            page=resolve_patch(page, current.page),
            statement_year=resolve_patch(statement_year, current.statement_year),
        ))
        logger.info(
            "Opinion updated",
            extra={"entity": "opinion", "entity_id": f"{writer_id}/{work_id}"},
        )
        return opinion

    async def delete_opinion(self, writer_id: WriterId, work_id: WorkId) -> None:
        await self.opinions.delete(writer_id, work_id)
        logger.info(
            "Opinion deleted",
            extra={"entity": "opinion", "entity_id": f"{writer_id}/{work_id}"},
        )
