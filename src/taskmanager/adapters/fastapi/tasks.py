"""FastAPI adapter – /tasks routes.

Every listing builds a :class:`TaskFilterCriteria` and is served by the
same composed-predicate search.
"""
from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from taskmanager.adapters.fastapi.deps import ActivePagination, Pagination, TaskServiceDep
from taskmanager.application.dto import PageResponse
from taskmanager.tasks.criteria import TaskFilterCriteria
from taskmanager.tasks.dto import CreateTaskRequest, SearchTaskRequest, TaskResponse, UpdateTaskRequest
from taskmanager.tasks.enums import TaskPriority, TaskStatus

router = APIRouter(prefix="/tasks", tags=["tasks"])

TaskPage = PageResponse[TaskResponse]
_ALL = TaskFilterCriteria()
_ACTIVE = TaskFilterCriteria(is_active=True)


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_task(body: CreateTaskRequest, service: TaskServiceDep) -> TaskResponse:
    return await service.create(body)


@router.get("/")
async def list_tasks(service: TaskServiceDep, page: Pagination) -> TaskPage:
    return await service.search(_ALL, page)


@router.get("/active")
async def list_active_tasks(service: TaskServiceDep, page: ActivePagination) -> TaskPage:
    return await service.search(_ACTIVE, page)


@router.get("/search")
async def search_tasks_by_text(
    query: Annotated[str, Query(description="Text searched in title and description")],
    service: TaskServiceDep,
    page: Pagination,
) -> TaskPage:
    return await service.search_by_text(query, page)


@router.post("/search")
async def search_tasks(body: SearchTaskRequest, service: TaskServiceDep, page: Pagination) -> TaskPage:
    return await service.search(body.to_criteria(), page)


@router.get("/exists/title/{title}")
async def task_title_exists(title: str, service: TaskServiceDep) -> bool:
    return await service.exists_by_title(title)


@router.get("/status/{task_status}")
async def list_tasks_by_status(task_status: TaskStatus, service: TaskServiceDep, page: Pagination) -> TaskPage:
    return await service.search(_ALL.with_(status=task_status), page)


@router.get("/priority/{priority}")
async def list_tasks_by_priority(priority: TaskPriority, service: TaskServiceDep, page: Pagination) -> TaskPage:
    return await service.search(_ALL.with_(priority=priority), page)


@router.get("/active/status/{task_status}")
async def list_active_tasks_by_status(
    task_status: TaskStatus, service: TaskServiceDep, page: Pagination
) -> TaskPage:
    return await service.search(_ACTIVE.with_(status=task_status), page)


@router.get("/active/priority/{priority}")
async def list_active_tasks_by_priority(
    priority: TaskPriority, service: TaskServiceDep, page: Pagination
) -> TaskPage:
    return await service.search(_ACTIVE.with_(priority=priority), page)


@router.get("/user/{user_id}")
async def list_user_tasks(user_id: UUID, service: TaskServiceDep, page: Pagination) -> TaskPage:
    return await service.search_for_user(user_id, _ALL, page)


@router.get("/user/{user_id}/active")
async def list_active_user_tasks(user_id: UUID, service: TaskServiceDep, page: Pagination) -> TaskPage:
    return await service.search_for_user(user_id, _ACTIVE, page)


@router.get("/user/{user_id}/status/{task_status}")
async def list_user_tasks_by_status(
    user_id: UUID, task_status: TaskStatus, service: TaskServiceDep, page: Pagination
) -> TaskPage:
    return await service.search_for_user(user_id, _ALL.with_(status=task_status), page)


@router.get("/user/{user_id}/priority/{priority}")
async def list_user_tasks_by_priority(
    user_id: UUID, priority: TaskPriority, service: TaskServiceDep, page: Pagination
) -> TaskPage:
    return await service.search_for_user(user_id, _ALL.with_(priority=priority), page)


@router.get("/{task_id}")
async def get_task(task_id: UUID, service: TaskServiceDep) -> TaskResponse:
    return await service.get(task_id)


@router.put("/{task_id}")
async def update_task(task_id: UUID, body: UpdateTaskRequest, service: TaskServiceDep) -> TaskResponse:
    return await service.update(task_id, body)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: UUID, service: TaskServiceDep) -> None:
    await service.soft_delete(task_id)


@router.delete("/{task_id}/hard", status_code=status.HTTP_204_NO_CONTENT)
async def hard_delete_task(task_id: UUID, service: TaskServiceDep) -> None:
    await service.hard_delete(task_id)


__all__ = ["router"]
