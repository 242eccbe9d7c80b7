"""Users – UserService use cases."""
from __future__ import annotations

from typing import Any, Callable
from uuid import UUID

from taskmanager.adapters.sqlalchemy import SqlAlchemyUnitOfWork, UserModel
from taskmanager.kernel.errors import ConflictError, NotFoundError
from taskmanager.observability.logging import AuditLogger, get_logger
from taskmanager.security import PasswordHasher
from taskmanager.users.dto import CreateUserRequest, UpdateUserRequest, UserResponse

log = get_logger(__name__)


def _already_exists(what: str, value: str) -> ConflictError:
    return ConflictError(f"{what} already exists: {value}", code="user_already_exists")


class UserService:
    def __init__(
        self,
        session_factory: Callable[[], Any],
        hasher: PasswordHasher,
        audit: AuditLogger | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._hasher = hasher
        self._audit = audit or AuditLogger()

    def _uow(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self._session_factory)

    async def create(self, request: CreateUserRequest) -> UserResponse:
        async with self._uow() as uow:
            if await uow.users.exists_by_username(request.username):
                raise _already_exists("Username", request.username)
            if await uow.users.exists_by_email(request.email):
                raise _already_exists("Email", request.email)
            user = UserModel(
                username=request.username,
                email=request.email,
                first_name=request.first_name,
                last_name=request.last_name,
                password=self._hasher.hash(request.password),
                is_active=True,
            )
            await uow.users.save(user)
            response = UserResponse.from_model(user)
        self._audit.user_created(user.id, user.username)
        return response

    async def get(self, user_id: UUID) -> UserResponse:
        async with self._uow() as uow:
            return UserResponse.from_model(await uow.users.get_or_raise(user_id))

    async def get_by_username(self, username: str) -> UserResponse:
        async with self._uow() as uow:
            user = await uow.users.get_by_username(username)
            if user is None:
                raise NotFoundError("User", username, by="username")
            return UserResponse.from_model(user)

    async def get_by_email(self, email: str) -> UserResponse:
        async with self._uow() as uow:
            user = await uow.users.get_by_email(email)
            if user is None:
                raise NotFoundError("User", email, by="email")
            return UserResponse.from_model(user)

    async def list_all(self) -> list[UserResponse]:
        async with self._uow() as uow:
            return [UserResponse.from_model(u) for u in await uow.users.find_all()]

    async def list_active(self) -> list[UserResponse]:
        async with self._uow() as uow:
            return [UserResponse.from_model(u) for u in await uow.users.find_active()]

    async def update(self, user_id: UUID, request: UpdateUserRequest) -> UserResponse:
        changed: dict[str, Any] = {"first_name": request.first_name, "last_name": request.last_name}
        async with self._uow() as uow:
            user = await uow.users.get_or_raise(user_id)
            if request.email is not None and request.email != user.email:
                if await uow.users.exists_by_email(request.email):
                    raise _already_exists("Email", request.email)
                changed["email"] = request.email
            if request.is_active is not None:
                changed["is_active"] = request.is_active
            for name, value in changed.items():
                setattr(user, name, value)
            if request.password:
                user.password = self._hasher.hash(request.password)
                changed["password"] = True
            await uow.users.save(user)
            response = UserResponse.from_model(user)
        self._audit.user_updated(user_id, response.username, changed)
        return response

    async def soft_delete(self, user_id: UUID) -> None:
        async with self._uow() as uow:
            user = await uow.users.get_or_raise(user_id)
            user.soft_delete()
            await uow.users.save(user)
            username = user.username
        self._audit.user_deleted(user_id, username)

    async def hard_delete(self, user_id: UUID) -> None:
        """Remove the user row; refused while the user still owns tasks."""
        async with self._uow() as uow:
            user = await uow.users.get_or_raise(user_id)
            if await uow.users.has_tasks(user_id):
                log.info("users.hard_delete_refused", user_id=str(user_id))
                raise ConflictError(
                    f"User {user_id} still owns tasks; delete or reassign them first",
                    code="user_has_tasks",
                )
            username = user.username
            await uow.users.delete(user)
        self._audit.user_deleted(user_id, username, hard=True)

    async def exists_by_username(self, username: str) -> bool:
        async with self._uow() as uow:
            return await uow.users.exists_by_username(username)

    async def exists_by_email(self, email: str) -> bool:
        async with self._uow() as uow:
            return await uow.users.exists_by_email(email)


__all__ = ["UserService"]
