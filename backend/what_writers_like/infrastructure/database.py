"""Database Session Manager — async engine, sessions with rollback, write transactions.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection (server DBs)
    - SQLite connections run with PRAGMA foreign_keys=ON so RESTRICT/CASCADE apply
    - SQLAlchemy exceptions never escape a write: integrity failures are
      translated by the caller's mapper, everything else becomes DatabaseError

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - atomic_write commits per call: each store write is its own transaction
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable

from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

from what_writers_like.core.domain_types import SELF_OPINION_MARKER
from what_writers_like.core.errors import DatabaseError, WritersError
from what_writers_like.db.base import Base

logger = logging.getLogger(__name__)

IntegrityMapper = Callable[[IntegrityError], WritersError | None]


def _on_sqlite_connect(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on FK enforcement for every new SQLite connection of `engine`."""
    if engine.dialect.name == "sqlite":
        sync_engine: Engine = engine.sync_engine
        event.listen(sync_engine, "connect", _on_sqlite_connect)


def build_engine(database_url: str, pool_size: int = 20, max_overflow: int = 10) -> AsyncEngine:
    """Create the async engine with dialect-appropriate pooling."""
    if database_url.startswith("sqlite"):
        kwargs: dict = {}
        # one shared connection, otherwise each connection gets its own empty DB
        if ":memory:" in database_url or database_url.endswith(":///"):
            kwargs["poolclass"] = StaticPool
        engine = create_async_engine(database_url, **kwargs)
    else:
        engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    enable_sqlite_foreign_keys(engine)
    return engine


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables plus integrity triggers (local runs and tests).

    Production schema is owned by the alembic migrations.
    """
    from what_writers_like import models  # noqa: F401  (populate metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ─── Integrity error classification ─────────────────────────────

def _message(exc: DBAPIError) -> str:
    return str(exc.orig if exc.orig is not None else exc)


def is_self_opinion_violation(exc: DBAPIError) -> bool:
    """Raised by the opinions/works triggers (db/triggers.py)."""
    return SELF_OPINION_MARKER in _message(exc)


def is_unique_violation(exc: DBAPIError) -> bool:
    msg = _message(exc).lower()
    return "unique constraint" in msg or "duplicate key" in msg


def is_foreign_key_violation(exc: DBAPIError) -> bool:
    return "foreign key" in _message(exc).lower()


@asynccontextmanager
async def atomic_write(
    db: AsyncSession, operation: str, on_integrity: IntegrityMapper | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """Run the body and commit; roll back and translate on any failure.

    `on_integrity` maps an IntegrityError to a domain error (or None to fall
    through to DatabaseError).
    """
    try:
        yield db
        await db.commit()
    except WritersError:
        await db.rollback()
        raise
    except IntegrityError as e:
        await db.rollback()
        mapped = on_integrity(e) if on_integrity else None
        if mapped is not None:
            raise mapped from e
        logger.error(f"DB integrity error: {e}", extra={"operation": operation})
        raise DatabaseError("Integrity constraint violated", operation) from e
    except OperationalError as e:
        await db.rollback()
        logger.error(f"DB operational error: {e}", extra={"operation": operation})
        raise DatabaseError("Connection or operational error", operation) from e
    except DBAPIError as e:
        await db.rollback()
        logger.error(f"DB driver error: {e}", extra={"operation": operation})
        raise DatabaseError("Database driver error", operation) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"SQLAlchemy error: {e}", extra={"operation": operation})
        raise DatabaseError("Database operation failed", operation) from e


@asynccontextmanager
async def guarded_read(operation: str) -> AsyncGenerator[None, None]:
    """Translate read-path SQLAlchemy failures to DatabaseError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"DB read error: {e}", extra={"operation": operation})
        raise DatabaseError("Database query failed", operation) from e


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = build_engine(database_url, pool_size, max_overflow)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "session") from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
