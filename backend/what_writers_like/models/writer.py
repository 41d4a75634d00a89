"""WriterModel ORM — persists an author.

Invariants:
    - id is issued by the database (rowid / bigserial), never by the application
    - name is non-nullable varchar(255); birth_year non-nullable
    - death_year and bio are nullable (NULL = unknown)

Design Decisions:
    - GIN trigram indexes on name and bio exist only on PostgreSQL (pg_trgm);
      other dialects rank in Python (core/similarity.py)
    - SQLite AUTOINCREMENT: a deleted id is never handed out again (plain
      rowid reuses max(rowid)+1)
"""

from sqlalchemy import DDL, Index, Integer, String, Text, event
from sqlalchemy.orm import Mapped, mapped_column

from what_writers_like.core.entities import Writer
from what_writers_like.db.base import Base, IdType


class WriterModel(Base):
    """Writer entity: an author of works and holder of opinions."""
    __tablename__ = "writers"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    birth_year: Mapped[int] = mapped_column(Integer, nullable=False)
    death_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index(
            "ix_writers_name_trgm", "name",
            postgresql_using="gin",
            postgresql_ops={"name": "gin_trgm_ops"},
        ).ddl_if(dialect="postgresql"),
        Index(
            "ix_writers_bio_trgm", "bio",
            postgresql_using="gin",
            postgresql_ops={"bio": "gin_trgm_ops"},
        ).ddl_if(dialect="postgresql"),
        {"sqlite_autoincrement": True},
    )

    def to_entity(self) -> Writer:
        return Writer(
            id=self.id,
            name=self.name,
            birth_year=self.birth_year,
            death_year=self.death_year,
            bio=self.bio,
        )


event.listen(
    WriterModel.__table__, "before_create",
    DDL("CREATE EXTENSION IF NOT EXISTS pg_trgm").execute_if(dialect="postgresql"),
)
