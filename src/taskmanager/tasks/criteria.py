"""Tasks – TaskFilterCriteria value object."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any
from uuid import UUID

from taskmanager.kernel.types import to_naive_utc
from taskmanager.tasks.enums import TaskPriority, TaskStatus


_DATETIME_FIELDS = ("due_date_from", "due_date_to", "created_at_from", "created_at_to")


@dataclasses.dataclass(frozen=True)
class TaskFilterCriteria:
    """All optional filter dimensions of one task search.

    ``None`` means "not requested" and never narrows the result. The search
    text is trimmed and timestamps are normalised to naive UTC, matching how
    they are stored.
    """

    search_query: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    user_id: UUID | None = None
    is_active: bool | None = None
    due_date_from: datetime | None = None
    due_date_to: datetime | None = None
    created_at_from: datetime | None = None
    created_at_to: datetime | None = None

    def __post_init__(self) -> None:
        if self.search_query is not None:
            object.__setattr__(self, "search_query", self.search_query.strip())
        for name in _DATETIME_FIELDS:
            object.__setattr__(self, name, to_naive_utc(getattr(self, name)))

    @property
    def is_empty(self) -> bool:
        """``True`` when no field would narrow the result set."""
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if field.name == "search_query":
                if value:
                    return False
            elif value is not None:
                return False
        return True

    def with_(self, **changes: Any) -> "TaskFilterCriteria":
        """Return a copy with *changes* applied."""
        return dataclasses.replace(self, **changes)


__all__ = ["TaskFilterCriteria"]
