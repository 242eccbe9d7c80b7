"""FastAPI adapter – application factory."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from taskmanager import __version__
from taskmanager.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from taskmanager.adapters.fastapi.middleware import (
    FastAPICorrelationIdMiddleware,
    FastAPIRequestLoggingMiddleware,
)
from taskmanager.adapters.fastapi.routers import FastAPIHealthRouter
from taskmanager.adapters.fastapi.tasks import router as tasks_router
from taskmanager.adapters.fastapi.users import router as users_router
from taskmanager.adapters.sqlalchemy import SqlAlchemySessionFactory
from taskmanager.config import AppSettings, EnvSettingsLoader
from taskmanager.observability.logging import AuditLogger, JsonLoggerFactory, get_logger
from taskmanager.security import PasswordHasher
from taskmanager.tasks.service import TaskService
from taskmanager.users.service import UserService

log = get_logger(__name__)


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Build the task manager application.

    Settings default to the ``TASKMANAGER_*`` environment variables. The
    schema is created on startup when ``settings.create_schema`` is set and
    the engine is disposed on shutdown.
    """
    settings = settings or EnvSettingsLoader().load(AppSettings)
    JsonLoggerFactory.configure(settings.log_level, json=settings.json_logs)

    session_factory = SqlAlchemySessionFactory(settings.database_url, echo=settings.echo_sql)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:  # noqa: ARG001
        if settings.create_schema:
            await session_factory.create_schema()
        log.info("app.started", version=__version__)
        try:
            yield
        finally:
            await session_factory.dispose()
            log.info("app.stopped")

    app = FastAPI(title="Task Manager", version=__version__, lifespan=lifespan)

    audit = AuditLogger()
    app.state.settings = settings
    app.state.session_factory = session_factory
    app.state.task_service = TaskService(session_factory, audit)
    app.state.user_service = UserService(session_factory, PasswordHasher(settings.bcrypt_rounds), audit)

    FastAPIExceptionMapper().register(app)
    # last added runs first
    app.add_middleware(FastAPIRequestLoggingMiddleware, slow_request_ms=settings.slow_request_ms, audit=audit)
    app.add_middleware(FastAPICorrelationIdMiddleware)

    async def database() -> bool:
        return await session_factory.ping()

    app.include_router(FastAPIHealthRouter(readiness_checks=[database]))
    app.include_router(tasks_router)
    app.include_router(users_router)
    return app


__all__ = ["create_app"]
