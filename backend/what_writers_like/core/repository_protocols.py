"""Boundary Protocols — store contracts between the validation layer and persistence.

Invariants:
    - Services depend on these Protocols only, never on SQLAlchemy
    - Every write is atomic per record and either fully applies or raises
    - OpinionStore.create/update enforce the self-opinion invariant themselves,
      independent of any check the caller already made
    - Ids are issued by the store; callers never choose them

Design Decisions:
    - Protocol over ABC: structural subtyping, so in-memory fakes need no base class
    - Async methods: implementations do IO
    - Postponed annotations: the `list` method shadows the builtin inside each
      class body, so `list[...]` return types must not be evaluated there
"""

from __future__ import annotations

from typing import Protocol

from what_writers_like.core.domain_types import WorkId, WriterId
from what_writers_like.core.entities import Opinion, Work, Writer


class WriterStore(Protocol):
    """Contract for writer persistence."""
    async def create(
        self, name: str, birth_year: int,
        death_year: int | None = None, bio: str | None = None,
    ) -> Writer: ...
    async def get_by_id(self, writer_id: WriterId) -> Writer | None: ...
    async def list(self, limit: int, offset: int) -> list[Writer]: ...
    async def search(self, query: str, limit: int, offset: int) -> list[Writer]: ...
    async def update(self, writer: Writer) -> Writer: ...
    async def delete(self, writer_id: WriterId) -> None: ...


class WorkStore(Protocol):
    """Contract for work persistence."""
    async def create(self, title: str, author_id: WriterId) -> Work: ...
    async def get_by_id(self, work_id: WorkId) -> Work | None: ...
    async def get_by_author(self, author_id: WriterId) -> list[Work]: ...
    async def list(self, limit: int, offset: int) -> list[Work]: ...
    async def search(self, query: str, limit: int, offset: int) -> list[Work]: ...
    async def update(self, work: Work) -> Work: ...
    async def delete(self, work_id: WorkId) -> None: ...


class OpinionStore(Protocol):
    """Contract for opinion persistence, keyed by (writer_id, work_id)."""
    async def create(self, opinion: Opinion) -> Opinion: ...
    async def get_by_key(self, writer_id: WriterId, work_id: WorkId) -> Opinion | None: ...
    async def get_by_writer(self, writer_id: WriterId) -> list[Opinion]: ...
    async def get_by_work(self, work_id: WorkId) -> list[Opinion]: ...
    async def list(self, limit: int, offset: int) -> list[Opinion]: ...
    async def update(self, opinion: Opinion) -> Opinion: ...
    async def delete(self, writer_id: WriterId, work_id: WorkId) -> None: ...
