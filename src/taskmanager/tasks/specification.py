"""Tasks – predicate composer for task searches.

Each ``with_*`` rule turns one optional filter into a predicate; an absent
filter yields :data:`~taskmanager.kernel.query.ALWAYS`, so it has no effect
once conjoined. :meth:`TaskSpecification.with_filters` conjoins all rules
in a fixed order.

Example::

    criteria = TaskFilterCriteria(search_query="deploy", priority=TaskPriority.HIGH)
    predicate = TaskSpecification.with_filters(criteria)
"""
from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from taskmanager.kernel.query import ALWAYS, And, Contains, Eq, Or, Predicate, Range
from taskmanager.tasks.criteria import TaskFilterCriteria
from taskmanager.tasks.enums import TaskPriority, TaskStatus


class TaskFields:
    """Attribute names of the task record that predicates refer to."""

    ID = "id"
    TITLE = "title"
    DESCRIPTION = "description"
    STATUS = "status"
    PRIORITY = "priority"
    USER_ID = "user_id"
    IS_ACTIVE = "is_active"
    DUE_DATE = "due_date"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


def _equals(field: str, value: Any) -> Predicate:
    return ALWAYS if value is None else Eq(field, value)


def _between(field: str, lower: datetime | None, upper: datetime | None) -> Predicate:
    if lower is None and upper is None:
        return ALWAYS
    return Range(field, lower=lower, upper=upper)


class TaskSpecification:
    """Stateless namespace of task predicate rules."""

    @staticmethod
    def with_filters(criteria: TaskFilterCriteria) -> And:
        """Conjoin every rule; an empty *criteria* yields a tautology."""
        return And((
            TaskSpecification.with_search_query(criteria.search_query),
            TaskSpecification.with_status(criteria.status),
            TaskSpecification.with_priority(criteria.priority),
            TaskSpecification.with_user_id(criteria.user_id),
            TaskSpecification.with_is_active(criteria.is_active),
            TaskSpecification.with_due_date_between(criteria.due_date_from, criteria.due_date_to),
            TaskSpecification.with_created_at_between(criteria.created_at_from, criteria.created_at_to),
        ))

    @staticmethod
    def with_search_query(search_query: str | None) -> Predicate:
        """Match *search_query* inside the title or the description."""
        if search_query is None or not search_query.strip():
            return ALWAYS
        pattern = search_query.strip().lower()
        return Or((
            Contains(TaskFields.TITLE, pattern),
            Contains(TaskFields.DESCRIPTION, pattern),
        ))

    @staticmethod
    def with_status(status: TaskStatus | None) -> Predicate:
        return _equals(TaskFields.STATUS, status)

    @staticmethod
    def with_priority(priority: TaskPriority | None) -> Predicate:
        return _equals(TaskFields.PRIORITY, priority)

    @staticmethod
    def with_user_id(user_id: UUID | None) -> Predicate:
        return _equals(TaskFields.USER_ID, user_id)

    @staticmethod
    def with_is_active(is_active: bool | None) -> Predicate:
        return _equals(TaskFields.IS_ACTIVE, is_active)

    @staticmethod
    def with_active_status() -> Predicate:
        return TaskSpecification.with_is_active(True)

    @staticmethod
    def with_due_date_between(date_from: datetime | None, date_to: datetime | None) -> Predicate:
        return _between(TaskFields.DUE_DATE, date_from, date_to)

    @staticmethod
    def with_created_at_between(date_from: datetime | None, date_to: datetime | None) -> Predicate:
        return _between(TaskFields.CREATED_AT, date_from, date_to)


def compose(criteria: TaskFilterCriteria) -> Predicate:
    """Shorthand for :meth:`TaskSpecification.with_filters`."""
    return TaskSpecification.with_filters(criteria)


__all__ = ["TaskFields", "TaskSpecification", "compose"]
