"""Writer Service — validated create/update/delete for writers.

Invariants:
    - name is checked before birth_year
    - update requires the writer to exist; optional fields follow UNSET semantics
    - delete refuses while the writer authors any work (WriterHasWorksError)
"""

import logging
from dataclasses import replace

from what_writers_like.core.domain_types import UNSET, Patch, WriterId, resolve_patch
from what_writers_like.core.enforce_entities import validate_writer_fields
from what_writers_like.core.entities import Writer
from what_writers_like.core.errors import WriterHasWorksError, WriterNotFoundError
from what_writers_like.core.repository_protocols import WorkStore, WriterStore

logger = logging.getLogger(__name__)


class WriterService:
    """Business rules for writers."""

    def __init__(self, writers: WriterStore, works: WorkStore):
        self.writers = writers
        self.works = works

    async def create_writer(
        self, name: str, birth_year: int,
        death_year: int | None = None, bio: str | None = None,
    ) -> Writer:
        error = validate_writer_fields(name, birth_year)
        if error:
            raise error
        writer = await self.writers.create(name, birth_year, death_year, bio)
        logger.info(
            f"Writer created: {writer.name}",
            extra={"entity": "writer", "entity_id": str(writer.id)},
        )
        return writer

    async def get_writer(self, writer_id: WriterId) -> Writer:
        writer = await self.writers.get_by_id(writer_id)
        if writer is None:
            raise WriterNotFoundError(writer_id)
        return writer

    async def list_writers(self, limit: int, offset: int) -> list[Writer]:
        return await self.writers.list(limit, offset)

    async def update_writer(
        self,
        writer_id: WriterId,
        name: str,
        birth_year: int,
        death_year: Patch[int] = UNSET,
        bio: Patch[str] = UNSET,
    ) -> Writer:
        error = validate_writer_fields(name, birth_year)
        if error:
            raise error
        current = await self.get_writer(writer_id)
        updated = replace(
            current,
            name=name,
            birth_year=birth_year,
            death_year=resolve_patch(death_year, current.death_year),
            bio=resolve_patch(bio, current.bio),
        )
        writer = await self.writers.update(updated)
        logger.info(
            "Writer updated",
            extra={"entity": "writer", "entity_id": str(writer_id)},
        )
        return writer

    async def delete_writer(self, writer_id: WriterId) -> None:
        works = await self.works.get_by_author(writer_id)
        if works:
            raise WriterHasWorksError(writer_id, len(works))
        await self.writers.delete(writer_id)
        logger.info(
            "Writer deleted",
            extra={"entity": "writer", "entity_id": str(writer_id)},
        )
