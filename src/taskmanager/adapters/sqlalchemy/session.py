"""SQLAlchemy adapter – SqlAlchemySessionFactory."""
from __future__ import annotations

from typing import Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from taskmanager.adapters.sqlalchemy.models import Base
from taskmanager.observability.logging import get_logger

log = get_logger(__name__)


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection: Any, connection_record: Any) -> None:  # noqa: ARG001
    # SQLite's built-in lower() only folds ASCII letters
    dbapi_connection.create_function("lower", 1, _unicode_lower)


class SqlAlchemySessionFactory:
    """Creates async SQLAlchemy sessions from an engine URL.

    On SQLite, ``lower()`` is replaced on every new connection by a
    Unicode-aware version so case-insensitive search also folds letters
    such as ``Ç`` or ``É``.
    """

    def __init__(self, database_url: str, **engine_kwargs: Any) -> None:
        self._engine = create_async_engine(database_url, **engine_kwargs)
        if self._engine.dialect.name == "sqlite":
            event.listen(self._engine.sync_engine, "connect", _register_sqlite_functions)
        self._session_factory = async_sessionmaker(self._engine, class_=AsyncSession, expire_on_commit=False)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    def __call__(self) -> AsyncSession:
        return self._session_factory()

    async def create_schema(self) -> None:
        """Create every table known to the ORM metadata (idempotent)."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        log.info("database.schema_created", tables=sorted(Base.metadata.tables))

    async def ping(self) -> bool:
        """Readiness probe: ``True`` when ``SELECT 1`` succeeds."""
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        await self._engine.dispose()


__all__ = ["SqlAlchemySessionFactory"]
