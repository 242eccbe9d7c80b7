"""Tasks – TaskService use cases.

Every operation runs in its own :class:`SqlAlchemyUnitOfWork` and returns
response bodies built while the session is still open. All list queries are
expressed as :class:`TaskFilterCriteria` and go through the composer.
"""
from __future__ import annotations

from typing import Any, Callable
from uuid import UUID

from taskmanager.adapters.sqlalchemy import SqlAlchemyUnitOfWork, TaskModel
from taskmanager.application.dto import PageResponse
from taskmanager.application.pagination import PageRequest
from taskmanager.kernel.errors import NotFoundError
from taskmanager.observability.logging import AuditLogger, get_logger
from taskmanager.tasks.criteria import TaskFilterCriteria
from taskmanager.tasks.dto import CreateTaskRequest, TaskResponse, UpdateTaskRequest
from taskmanager.tasks.specification import TaskSpecification

log = get_logger(__name__)


class TaskService:
    def __init__(self, session_factory: Callable[[], Any], audit: AuditLogger | None = None) -> None:
        self._session_factory = session_factory
        self._audit = audit or AuditLogger()

    def _uow(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self._session_factory)

    async def create(self, request: CreateTaskRequest) -> TaskResponse:
        async with self._uow() as uow:
            user = await uow.users.get_or_raise(request.user_id)
            task = TaskModel(
                title=request.title,
                description=request.description,
                priority=request.priority,
                status=request.status,
                user=user,
                is_active=True,
                due_date=request.due_date,
            )
            await uow.tasks.save(task)
            response = TaskResponse.from_model(task)
        self._audit.task_created(task.id, task.title, user.id)
        return response

    async def get(self, task_id: UUID) -> TaskResponse:
        async with self._uow() as uow:
            return TaskResponse.from_model(await uow.tasks.get_or_raise(task_id))

    async def search(
        self,
        criteria: TaskFilterCriteria,
        page_request: PageRequest,
    ) -> PageResponse[TaskResponse]:
        """Return one page of tasks matching every filter set in *criteria*."""
        predicate = TaskSpecification.with_filters(criteria)
        log.debug("tasks.search", criteria_empty=criteria.is_empty, page=page_request.page, size=page_request.size)
        async with self._uow() as uow:
            page = await uow.tasks.find_page(predicate, page_request)
            return PageResponse[TaskResponse].from_page(page, TaskResponse.from_model)

    async def search_for_user(
        self,
        user_id: UUID,
        criteria: TaskFilterCriteria,
        page_request: PageRequest,
    ) -> PageResponse[TaskResponse]:
        """Like :meth:`search`, scoped to one owner; unknown owners are a 404."""
        async with self._uow() as uow:
            if not await uow.users.exists(user_id):
                raise NotFoundError("User", user_id)
            predicate = TaskSpecification.with_filters(criteria.with_(user_id=user_id))
            page = await uow.tasks.find_page(predicate, page_request)
            return PageResponse[TaskResponse].from_page(page, TaskResponse.from_model)

    async def search_by_text(self, query: str, page_request: PageRequest) -> PageResponse[TaskResponse]:
        async with self._uow() as uow:
            page = await uow.tasks.find_page(TaskSpecification.with_search_query(query), page_request)
            return PageResponse[TaskResponse].from_page(page, TaskResponse.from_model)

    async def update(self, task_id: UUID, request: UpdateTaskRequest) -> TaskResponse:
        changes = request.changes()
        async with self._uow() as uow:
            task = await uow.tasks.get_or_raise(task_id)
            for name, value in changes.items():
                setattr(task, name, value)
            await uow.tasks.save(task)
            response = TaskResponse.from_model(task)
        self._audit.task_updated(task_id, response.title, changes)
        return response

    async def soft_delete(self, task_id: UUID) -> None:
        async with self._uow() as uow:
            task = await uow.tasks.get_or_raise(task_id)
            task.soft_delete()
            await uow.tasks.save(task)
            title = task.title
        self._audit.task_deleted(task_id, title)

    async def hard_delete(self, task_id: UUID) -> None:
        async with self._uow() as uow:
            task = await uow.tasks.get_or_raise(task_id)
            title = task.title
            await uow.tasks.delete(task)
        self._audit.task_deleted(task_id, title, hard=True)

    async def exists_by_title(self, title: str) -> bool:
        async with self._uow() as uow:
            return await uow.tasks.exists_by_title(title)


__all__ = ["TaskService"]
