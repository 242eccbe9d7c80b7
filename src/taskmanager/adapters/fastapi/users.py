"""FastAPI adapter – /users routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, status

from taskmanager.adapters.fastapi.deps import UserServiceDep
from taskmanager.users.dto import CreateUserRequest, UpdateUserRequest, UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_user(body: CreateUserRequest, service: UserServiceDep) -> UserResponse:
    return await service.create(body)


@router.get("/")
async def list_users(service: UserServiceDep) -> list[UserResponse]:
    return await service.list_all()


@router.get("/active")
async def list_active_users(service: UserServiceDep) -> list[UserResponse]:
    return await service.list_active()


@router.get("/username/{username}")
async def get_user_by_username(username: str, service: UserServiceDep) -> UserResponse:
    return await service.get_by_username(username)


@router.get("/email/{email}")
async def get_user_by_email(email: str, service: UserServiceDep) -> UserResponse:
    return await service.get_by_email(email)


@router.get("/exists/username/{username}")
async def username_exists(username: str, service: UserServiceDep) -> bool:
    return await service.exists_by_username(username)


@router.get("/exists/email/{email}")
async def email_exists(email: str, service: UserServiceDep) -> bool:
    return await service.exists_by_email(email)


@router.get("/{user_id}")
async def get_user(user_id: UUID, service: UserServiceDep) -> UserResponse:
    return await service.get(user_id)


@router.put("/{user_id}")
async def update_user(user_id: UUID, body: UpdateUserRequest, service: UserServiceDep) -> UserResponse:
    return await service.update(user_id, body)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: UUID, service: UserServiceDep) -> None:
    await service.soft_delete(user_id)


@router.delete("/{user_id}/hard", status_code=status.HTTP_204_NO_CONTENT)
async def hard_delete_user(user_id: UUID, service: UserServiceDep) -> None:
    await service.hard_delete(user_id)


__all__ = ["router"]
