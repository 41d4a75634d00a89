"""WorkModel ORM — persists a creative work and its author reference.

Invariants:
    - author_id references writers.id with ON DELETE RESTRICT: a writer with
      works cannot be deleted, even if the application check is bypassed
    - author_id is indexed (works by author is a hot path for writer deletion)
    - ids only grow: a deleted work id is never reissued (AUTOINCREMENT on SQLite)
"""

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from what_writers_like.core.entities import Work
from what_writers_like.db.base import Base, IdType


class WorkModel(Base):
    """Work entity: a creative output authored by one writer."""
    __tablename__ = "works"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("writers.id", ondelete="RESTRICT"),
        nullable=False, index=True,
    )

    __table_args__ = (
        Index(
            "ix_works_title_trgm", "title",
            postgresql_using="gin",
            postgresql_ops={"title": "gin_trgm_ops"},
        ).ddl_if(dialect="postgresql"),
        {"sqlite_autoincrement": True},
    )

    def to_entity(self) -> Work:
        return Work(id=self.id, title=self.title, author_id=self.author_id)
