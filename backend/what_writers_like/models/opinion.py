"""OpinionModel ORM — persists one writer's statement about one work.

Invariants:
    - Primary key is (writer_id, work_id): at most one opinion per pair
    - Both FKs cascade on delete: removing a work or writer removes its opinions
    - writer_id != works.author_id for work_id, enforced by trigger (db/triggers.py)

Design Decisions:
    - Secondary index on work_id; writer_id lookups use the primary key prefix
"""

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from what_writers_like.core.entities import Opinion
from what_writers_like.db.base import Base, IdType
from what_writers_like.db.triggers import install_triggers


class OpinionModel(Base):
    """Opinion entity, keyed by (writer_id, work_id)."""
    __tablename__ = "opinions"

    writer_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("writers.id", ondelete="CASCADE"), primary_key=True,
    )
    work_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("works.id", ondelete="CASCADE"),
        primary_key=True, index=True,
    )
    sentiment: Mapped[bool] = mapped_column(Boolean, nullable=False)
    quote: Mapped[str] = mapped_column(Text, nullable=False)
    source: Mapped[str] = mapped_column(String(255), nullable=False)
    page: Mapped[str | None] = mapped_column(String(100), nullable=True)
    statement_year: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def to_entity(self) -> Opinion:
        return Opinion(
            writer_id=self.writer_id,
            work_id=self.work_id,
            sentiment=self.sentiment,
            quote=self.quote,
            source=self.source,
            page=self.page,
            statement_year=self.statement_year,
        )


install_triggers(OpinionModel.__table__)
