"""SQLAlchemy adapter – SqlAlchemyUnitOfWork."""
from __future__ import annotations

from typing import Any, Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskmanager.adapters.sqlalchemy.repository import (
    SqlAlchemyTaskRepository,
    SqlAlchemyUserRepository,
)
from taskmanager.kernel.errors import BaseError, ConflictError, PersistenceError
from taskmanager.observability.logging import get_logger

log = get_logger(__name__)


def translate_db_error(exc: SQLAlchemyError) -> BaseError:
    """Map a driver/ORM failure onto the kernel error hierarchy."""
    if isinstance(exc, IntegrityError):
        return ConflictError(
            "The change conflicts with existing data",
            code="data_integrity_violation",
            cause=exc,
        )
    return PersistenceError(operation=type(exc).__name__, cause=exc)


class SqlAlchemyUnitOfWork:
    """SQLAlchemy async unit of work.

    Commits when the block exits cleanly, rolls back otherwise. SQLAlchemy
    errors leaving the block are re-raised as kernel errors.

    Usage::

        async with SqlAlchemyUnitOfWork(session_factory) as uow:
            task = await uow.tasks.get_or_raise(task_id)
            task.soft_delete()
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._factory = session_factory
        self.session: Any = None
        self.tasks: SqlAlchemyTaskRepository
        self.users: SqlAlchemyUserRepository

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self.session = self._factory()
        self.tasks = SqlAlchemyTaskRepository(self.session)
        self.users = SqlAlchemyUserRepository(self.session)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            await self.session.close()
        if isinstance(exc_val, SQLAlchemyError):
            raise translate_db_error(exc_val) from exc_val

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            log.warning("uow.commit_failed", error=type(exc).__name__)
            await self.session.rollback()
            raise translate_db_error(exc) from exc

    async def rollback(self) -> None:
        await self.session.rollback()


__all__ = ["SqlAlchemyUnitOfWork", "translate_db_error"]
