"""FastAPI adapter – reusable dependency functions."""
from __future__ import annotations

from typing import Annotated, Callable

from fastapi import Depends, Query, Request

from taskmanager.application.pagination import MAX_PAGE_SIZE, PageRequest
from taskmanager.tasks.service import TaskService
from taskmanager.users.service import UserService

DEFAULT_SORT = "createdAt,desc"


def pagination(default_size: int = 10) -> Callable[..., PageRequest]:
    """Build a dependency reading ``page``, ``size`` and ``sort`` query params.

    ``sort`` may be repeated (``sort=status,asc&sort=createdAt,desc``).
    """

    async def pagination_dep(
        page: Annotated[int, Query(ge=0, description="Zero-based page number")] = 0,
        size: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE, description="Items per page")] = default_size,
        sort: Annotated[list[str] | None, Query(description="field,direction")] = None,
    ) -> PageRequest:
        return PageRequest.of(page, size, *(sort or [DEFAULT_SORT]))

    return pagination_dep


Pagination = Annotated[PageRequest, Depends(pagination())]
ActivePagination = Annotated[PageRequest, Depends(pagination(default_size=5))]


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]


__all__ = [
    "ActivePagination",
    "DEFAULT_SORT",
    "Pagination",
    "TaskServiceDep",
    "UserServiceDep",
    "pagination",
]
