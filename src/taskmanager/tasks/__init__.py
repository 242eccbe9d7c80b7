"""Tasks – enums, filter criteria, predicate composer, DTOs and service."""
from taskmanager.tasks.criteria import TaskFilterCriteria
from taskmanager.tasks.enums import TaskPriority, TaskStatus
from taskmanager.tasks.specification import TaskFields, TaskSpecification, compose

__all__ = [
    "TaskFields",
    "TaskFilterCriteria",
    "TaskPriority",
    "TaskSpecification",
    "TaskStatus",
    "compose",
]
