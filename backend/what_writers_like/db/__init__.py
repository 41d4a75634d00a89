"""Database Schema — declarative Base and storage-level integrity triggers.

Invariants:
    - All ORM models inherit from db.base.Base
    - Integrity triggers are installed wherever the tables are created
      (metadata.create_all or alembic migration), never added by hand
"""
