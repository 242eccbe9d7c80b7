"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from taskmanager.observability.logging.filters import SensitiveFieldsFilter
from taskmanager.observability.logging.processors import CorrelationProcessor


class JsonLoggerFactory:
    """Configure structlog on top of the stdlib root logger.

    Every record, including those of third-party libraries such as uvicorn
    and SQLAlchemy, goes through the same processor chain and is rendered
    as JSON (or as coloured console lines when ``json=False``).
    """

    @staticmethod
    def configure(
        level: int | str = logging.INFO,
        *,
        json: bool = True,
        sensitive_fields: frozenset[str] | None = None,
    ) -> None:
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())

        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            CorrelationProcessor(),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            SensitiveFieldsFilter(sensitive_fields),
        ]

        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        final: list[Any] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
        if json:
            final += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        else:
            final.append(structlog.dev.ConsoleRenderer())
        formatter = structlog.stdlib.ProcessorFormatter(foreign_pre_chain=shared_processors, processors=final)
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)


__all__ = ["JsonLoggerFactory"]
