"""Tasks – request and response bodies."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import AfterValidator, StringConstraints

from taskmanager.application.dto import CamelModel
from taskmanager.kernel.types import to_naive_utc
from taskmanager.tasks.criteria import TaskFilterCriteria
from taskmanager.tasks.enums import TaskPriority, TaskStatus

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Description = Annotated[str, StringConstraints(max_length=500)]
Timestamp = Annotated[datetime, AfterValidator(to_naive_utc)]


class CreateTaskRequest(CamelModel):
    title: Title
    description: Description | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    user_id: UUID
    due_date: Timestamp | None = None


class UpdateTaskRequest(CamelModel):
    """Partial update; fields left out (or sent as null) keep their value."""

    title: Title | None = None
    description: Description | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    is_active: bool | None = None
    due_date: Timestamp | None = None

    def changes(self) -> dict[str, Any]:
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class SearchTaskRequest(CamelModel):
    search_query: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    user_id: UUID | None = None
    is_active: bool | None = None
    due_date_from: datetime | None = None
    due_date_to: datetime | None = None
    created_at_from: datetime | None = None
    created_at_to: datetime | None = None

    def to_criteria(self) -> TaskFilterCriteria:
        return TaskFilterCriteria(**self.model_dump())


class TaskResponse(CamelModel):
    id: UUID
    title: str
    description: str | None
    priority: TaskPriority
    status: TaskStatus
    user_id: UUID
    username: str
    is_active: bool
    due_date: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, task: Any) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            priority=task.priority,
            status=task.status,
            user_id=task.user_id,
            username=task.user.username,
            is_active=task.is_active,
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


__all__ = [
    "CreateTaskRequest",
    "SearchTaskRequest",
    "TaskResponse",
    "UpdateTaskRequest",
]
