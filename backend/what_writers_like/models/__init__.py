"""ORM Models — SQLAlchemy declarative models for writers, works and opinions.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM rows never leave infrastructure/: stores convert them to core entities

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from what_writers_like.models.writer import WriterModel  # noqa: F401
from what_writers_like.models.work import WorkModel  # noqa: F401
from what_writers_like.models.opinion import OpinionModel  # noqa: F401
