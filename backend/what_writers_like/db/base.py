"""SQLAlchemy Declarative Base — shared base class for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - IdType: BIGINT on PostgreSQL (bigserial sequence), INTEGER on SQLite so the
      column aliases the rowid and ids are issued atomically by the engine
"""

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import DeclarativeBase

IdType = BigInteger().with_variant(Integer(), "sqlite")


class Base(DeclarativeBase):
    """Base class for all What Writers Like ORM models."""
    pass
