"""Dependency Wiring — per-request stores and services built on the request session.

Invariants:
    - One AsyncSession per request; every store and service of that request shares it
    - Routes receive services, never stores or sessions (except search, which
      reads stores directly)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from what_writers_like.infrastructure.database import get_db
from what_writers_like.infrastructure.opinion_store import SqlOpinionStore
from what_writers_like.infrastructure.work_store import SqlWorkStore
from what_writers_like.infrastructure.writer_store import SqlWriterStore
from what_writers_like.services.opinion_service import OpinionService
from what_writers_like.services.work_service import WorkService
from what_writers_like.services.writer_service import WriterService


def get_writer_store(db: AsyncSession = Depends(get_db)) -> SqlWriterStore:
    return SqlWriterStore(db)


def get_work_store(db: AsyncSession = Depends(get_db)) -> SqlWorkStore:
    return SqlWorkStore(db)


def get_opinion_store(db: AsyncSession = Depends(get_db)) -> SqlOpinionStore:
    return SqlOpinionStore(db)


def get_writer_service(
    writers: SqlWriterStore = Depends(get_writer_store),
    works: SqlWorkStore = Depends(get_work_store),
) -> WriterService:
    return WriterService(writers, works)


def get_work_service(
    works: SqlWorkStore = Depends(get_work_store),
    writers: SqlWriterStore = Depends(get_writer_store),
    opinions: SqlOpinionStore = Depends(get_opinion_store),
) -> WorkService:
    return WorkService(works, writers, opinions)


def get_opinion_service(
    opinions: SqlOpinionStore = Depends(get_opinion_store),
    writers: SqlWriterStore = Depends(get_writer_store),
    works: SqlWorkStore = Depends(get_work_store),
) -> OpinionService:
    return OpinionService(opinions, writers, works)
