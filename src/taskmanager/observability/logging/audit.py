"""Observability – AuditLogger.

A dedicated structured-log sink (logger name ``audit``) for business events
on tasks and users.
"""
from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from taskmanager.observability.logging.processors import get_logger


class AuditAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    HARD_DELETE = "hard_delete"


class AuditEntity(str, Enum):
    TASK = "task"
    USER = "user"


class AuditLogger:
    """Emit one structured ``audit.<entity>.<action>`` entry per business event.

    Parameters
    ----------
    service:
        Logical service name injected into every audit entry.
    logger:
        Underlying structlog logger. Defaults to ``get_logger("audit")``.
    """

    def __init__(self, service: str = "taskmanager", logger: Any = None) -> None:
        self._service = service
        self._log = logger if logger is not None else get_logger("audit")

    def log_event(
        self,
        entity: AuditEntity,
        action: AuditAction,
        entity_id: Any,
        **extra: Any,
    ) -> None:
        self._log.info(
            f"audit.{entity.value}.{action.value}",
            service=self._service,
            entity_type=entity.value,
            entity_id=str(entity_id),
            action=action.value,
            timestamp=datetime.datetime.now(datetime.UTC).isoformat(),
            **extra,
        )

    def task_created(self, task_id: Any, title: str, user_id: Any) -> None:
        self.log_event(AuditEntity.TASK, AuditAction.CREATE, task_id, title=title, user_id=str(user_id))

    def task_updated(self, task_id: Any, title: str, changes: dict[str, Any]) -> None:
        self.log_event(AuditEntity.TASK, AuditAction.UPDATE, task_id, title=title, changes=sorted(changes))

    def task_deleted(self, task_id: Any, title: str, *, hard: bool = False) -> None:
        action = AuditAction.HARD_DELETE if hard else AuditAction.DELETE
        self.log_event(AuditEntity.TASK, action, task_id, title=title)

    def user_created(self, user_id: Any, username: str) -> None:
        self.log_event(AuditEntity.USER, AuditAction.CREATE, user_id, username=username)

    def user_updated(self, user_id: Any, username: str, changes: dict[str, Any]) -> None:
        self.log_event(AuditEntity.USER, AuditAction.UPDATE, user_id, username=username, changes=sorted(changes))

    def user_deleted(self, user_id: Any, username: str, *, hard: bool = False) -> None:
        action = AuditAction.HARD_DELETE if hard else AuditAction.DELETE
        self.log_event(AuditEntity.USER, action, user_id, username=username)

    def slow_operation(self, operation: str, duration_ms: float, threshold_ms: float) -> None:
        self._log.warning(
            "audit.slow_operation",
            service=self._service,
            operation=operation,
            duration_ms=round(duration_ms, 2),
            threshold_ms=threshold_ms,
        )


__all__ = ["AuditAction", "AuditEntity", "AuditLogger"]
