"""Async SQLAlchemy engine, session management and transactional scopes."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.exc import DBAPIError, TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from wallet_ledger.core.config import Settings, get_settings
from wallet_ledger.exceptions import (
    StorageBusyError,
    StorageError,
    StorageFailureError,
)

from .base import Base

logger = logging.getLogger(__name__)

# Connection execution option marking a transaction that will write.
WRITE_OPTION = "ledger_write"

# Serialization failure, deadlock detected, lock not available.
_BUSY_SQLSTATES = frozenset({"40001", "40P01", "55P03"})
_BUSY_MESSAGES = ("database is locked", "database table is locked", "database is busy")

_engine: AsyncEngine | None = None
AsyncSessionFactory: async_sessionmaker[AsyncSession] | None = None


def _install_sqlite_hooks(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        # BEGIN is emitted by _on_begin, not by the driver.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Connection) -> None:
        # IMMEDIATE takes the write lock up front so a read-check-write
        # sequence can never be interleaved with another writer.
        if conn.get_execution_options().get(WRITE_OPTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


def build_engine(settings: Settings) -> AsyncEngine:
    engine_kwargs: dict[str, Any] = {
        "echo": settings.database.echo,
        "future": True,
    }
    if settings.database.pool_size is not None:
        engine_kwargs["pool_size"] = settings.database.pool_size
    if settings.database.max_overflow is not None:
        engine_kwargs["max_overflow"] = settings.database.max_overflow

    is_sqlite = make_url(settings.database_url).get_backend_name() == "sqlite"
    if is_sqlite:
        engine_kwargs["connect_args"] = {"timeout": settings.database.busy_timeout}

    engine = create_async_engine(settings.database_url, **engine_kwargs)
    if is_sqlite:
        _install_sqlite_hooks(engine)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def get_engine() -> AsyncEngine:
    global _engine, AsyncSessionFactory
    if _engine is None:
        _engine = build_engine(get_settings())
        AsyncSessionFactory = build_session_factory(_engine)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if AsyncSessionFactory is None:
        get_engine()

    assert AsyncSessionFactory is not None  # for mypy
    return AsyncSessionFactory


def classify_storage_error(exc: Exception) -> StorageError:
    """Map a driver or pool error onto the retryable/fatal storage errors."""
    if isinstance(exc, PoolTimeoutError):
        return StorageBusyError("timed out waiting for a database connection")

    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    message = str(orig if orig is not None else exc).lower()
    if sqlstate in _BUSY_SQLSTATES or any(part in message for part in _BUSY_MESSAGES):
        return StorageBusyError(f"storage busy: {message}")
    return StorageFailureError(f"storage failure: {message}")


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
    *,
    write: bool = False,
    lock_timeout: float | None = None,
) -> AsyncIterator[AsyncSession]:
    """Run the enclosed block as one transaction.

    Commits when the block exits normally and rolls back on any exception,
    cancellation included. Driver errors leave as ``StorageError`` subclasses.
    """
    async with factory() as session:
        try:
            async with session.begin():
                conn = await session.connection(execution_options={WRITE_OPTION: write})
                if write and lock_timeout and conn.dialect.name == "postgresql":
                    await session.execute(
                        text(f"SET LOCAL lock_timeout = '{int(lock_timeout * 1000)}ms'")
                    )
                yield session
        except (DBAPIError, PoolTimeoutError) as exc:
            error = classify_storage_error(exc)
            if error.retryable:
                logger.warning("Transaction aborted, storage busy: %s", exc)
            else:
                logger.error("Transaction aborted, storage failure: %s", exc)
            raise error from exc


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create database tables in development mode (migrations preferred)."""
    from wallet_ledger.db import models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
