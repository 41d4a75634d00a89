"""Initial schema — writers, works, opinions, trigram indexes, self-opinion triggers.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from what_writers_like.db.triggers import POSTGRES_DROP_TRIGGERS, POSTGRES_TRIGGERS

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS pg_trgm")

    op.create_table(
        "writers",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("birth_year", sa.Integer, nullable=False),
        sa.Column("death_year", sa.Integer, nullable=True),
        sa.Column("bio", sa.Text, nullable=True),
    )

    op.create_table(
        "works",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column(
            "author_id", sa.BigInteger,
            sa.ForeignKey("writers.id", ondelete="RESTRICT"), nullable=False,
        ),
    )
    op.create_index("ix_works_author_id", "works", ["author_id"])

    op.create_table(
        "opinions",
        sa.Column(
            "writer_id", sa.BigInteger,
            sa.ForeignKey("writers.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "work_id", sa.BigInteger,
            sa.ForeignKey("works.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("sentiment", sa.Boolean, nullable=False),
        sa.Column("quote", sa.Text, nullable=False),
        sa.Column("source", sa.String(255), nullable=False),
        sa.Column("page", sa.String(100), nullable=True),
        sa.Column("statement_year", sa.Integer, nullable=True),
    )
    op.create_index("ix_opinions_work_id", "opinions", ["work_id"])

    op.create_index(
        "ix_writers_name_trgm", "writers", ["name"],
        postgresql_using="gin", postgresql_ops={"name": "gin_trgm_ops"},
    )
    op.create_index(
        "ix_writers_bio_trgm", "writers", ["bio"],
        postgresql_using="gin", postgresql_ops={"bio": "gin_trgm_ops"},
    )
    op.create_index(
        "ix_works_title_trgm", "works", ["title"],
        postgresql_using="gin", postgresql_ops={"title": "gin_trgm_ops"},
    )

    for statement in POSTGRES_TRIGGERS:
        op.execute(statement)


def downgrade() -> None:
    for statement in POSTGRES_DROP_TRIGGERS:
        op.execute(statement)
    op.drop_index("ix_works_title_trgm", table_name="works")
    op.drop_index("ix_writers_bio_trgm", table_name="writers")
    op.drop_index("ix_writers_name_trgm", table_name="writers")
    op.drop_table("opinions")
    op.drop_table("works")
    op.drop_table("writers")
