"""Entity Model — immutable value objects for Writer, Work and Opinion.

Invariants:
    - Frozen: entities are copied, never mutated (dataclasses.replace for updates)
    - No entity holds a reference to another; relations are ids only
    - Built from ORM rows by the stores; never persisted directly
"""

from dataclasses import dataclass

from what_writers_like.core.domain_types import WorkId, WriterId


@dataclass(frozen=True)
class Writer:
    id: WriterId
    name: str
    birth_year: int
    death_year: int | None = None
    bio: str | None = None


@dataclass(frozen=True)
class Work:
    id: WorkId
    title: str
    author_id: WriterId


@dataclass(frozen=True)
class Opinion:
    """A writer's recorded statement about someone else's work.

    Identity is the (writer_id, work_id) pair.
    """
    writer_id: WriterId
    work_id: WorkId
    sentiment: bool
    quote: str
    source: str
    page: str | None = None
    statement_year: int | None = None

    @property
    def key(self) -> tuple[WriterId, WorkId]:
        return (self.writer_id, self.work_id)
