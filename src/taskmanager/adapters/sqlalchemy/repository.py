"""SQLAlchemy adapter – repositories for tasks and users."""
from __future__ import annotations

import uuid
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskmanager.adapters.sqlalchemy.models import TaskModel, UserModel
from taskmanager.adapters.sqlalchemy.predicate import compile_predicate
from taskmanager.application.pagination import Page, PageRequest, Sort
from taskmanager.kernel.errors import NotFoundError, ValidationError
from taskmanager.kernel.query import ALWAYS, Predicate

TModel = TypeVar("TModel", TaskModel, UserModel)


class SqlAlchemyRepositoryBase(Generic[TModel]):
    """Generic async repository over one ORM model.

    ``sortable_fields`` maps the sort names accepted from clients (the
    camelCase wire names) to model attributes; snake_case attribute names
    are accepted as well.
    """

    model: ClassVar[type[Any]]
    resource_name: ClassVar[str] = "Resource"
    sortable_fields: ClassVar[dict[str, str]] = {}

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: uuid.UUID) -> TModel | None:  # noqa: A002
        return await self._session.get(self.model, id)

    async def get_or_raise(self, id: uuid.UUID) -> TModel:  # noqa: A002
        obj = await self.get(id)
        if obj is None:
            raise NotFoundError(self.resource_name, id)
        return obj

    async def exists(self, id: uuid.UUID) -> bool:  # noqa: A002
        return await self._exists(self.model.id == id)

    async def save(self, entity: TModel) -> TModel:
        self._session.add(entity)
        await self._session.flush()
        return entity

    async def delete(self, entity: TModel) -> None:
        await self._session.delete(entity)
        await self._session.flush()

    async def find_all(self, predicate: Predicate = ALWAYS) -> list[TModel]:
        stmt = (
            select(self.model)
            .where(compile_predicate(predicate, self.model))
            .order_by(self.model.created_at, self.model.id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().unique().all())

    async def count(self, predicate: Predicate = ALWAYS) -> int:
        stmt = (
            select(func.count())
            .select_from(self.model)
            .where(compile_predicate(predicate, self.model))
        )
        return int((await self._session.execute(stmt)).scalar_one())

    async def find_page(self, predicate: Predicate, page_request: PageRequest) -> Page[TModel]:
        """Return one page of rows matching *predicate*.

        Rows are always tie-broken by primary key after the requested sorts
        so consecutive pages partition the result set.
        """
        condition = compile_predicate(predicate, self.model)
        order_by = [self._order_clause(sort) for sort in page_request.sorts]
        order_by.append(self.model.id.asc())

        total = await self.count(predicate)
        stmt = (
            select(self.model)
            .where(condition)
            .order_by(*order_by)
            .offset(page_request.offset)
            .limit(page_request.size)
        )
        result = await self._session.execute(stmt)
        return Page(
            content=list(result.scalars().unique().all()),
            number=page_request.page,
            size=page_request.size,
            total_elements=total,
        )

    async def _exists(self, condition: Any) -> bool:
        return bool((await self._session.execute(select(exists().where(condition)))).scalar())

    def _order_clause(self, sort: Sort) -> Any:
        attribute = self.sortable_fields.get(sort.field)
        if attribute is None and sort.field in self.sortable_fields.values():
            attribute = sort.field
        if attribute is None:
            raise ValidationError.for_field(
                "sort",
                f"No property '{sort.field}' found for type '{self.resource_name}'",
            )
        column = getattr(self.model, attribute)
        return column.desc() if sort.descending else column.asc()


class SqlAlchemyTaskRepository(SqlAlchemyRepositoryBase[TaskModel]):
    model = TaskModel
    resource_name = "Task"
    sortable_fields = {
        "id": "id",
        "title": "title",
        "description": "description",
        "priority": "priority",
        "status": "status",
        "isActive": "is_active",
        "dueDate": "due_date",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    }

    async def exists_by_title(self, title: str) -> bool:
        return await self._exists(TaskModel.title == title)


class SqlAlchemyUserRepository(SqlAlchemyRepositoryBase[UserModel]):
    model = UserModel
    resource_name = "User"
    sortable_fields = {
        "id": "id",
        "username": "username",
        "email": "email",
        "firstName": "first_name",
        "lastName": "last_name",
        "isActive": "is_active",
        "createdAt": "created_at",
        "updatedAt": "updated_at",
    }

    async def get_by_username(self, username: str) -> UserModel | None:
        result = await self._session.execute(select(UserModel).where(UserModel.username == username))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        result = await self._session.execute(select(UserModel).where(UserModel.email == email))
        return result.scalar_one_or_none()

    async def exists_by_username(self, username: str) -> bool:
        return await self._exists(UserModel.username == username)

    async def exists_by_email(self, email: str) -> bool:
        return await self._exists(UserModel.email == email)

    async def find_active(self) -> list[UserModel]:
        stmt = (
            select(UserModel)
            .where(UserModel.active_filter())
            .order_by(UserModel.created_at, UserModel.id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def has_tasks(self, user_id: uuid.UUID) -> bool:
        return await self._exists(TaskModel.user_id == user_id)


__all__ = [
    "SqlAlchemyRepositoryBase",
    "SqlAlchemyTaskRepository",
    "SqlAlchemyUserRepository",
]
