"""Users – request and response bodies. Passwords are accepted, never returned."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import AfterValidator, Field, StringConstraints

from taskmanager.application.dto import CamelModel
from taskmanager.kernel.types import check_email

Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=50)]
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
EmailAddress = Annotated[str, AfterValidator(check_email)]
Password = Annotated[str, Field(min_length=6)]


class CreateUserRequest(CamelModel):
    username: Username
    email: EmailAddress
    first_name: Name
    last_name: Name
    password: Password


class UpdateUserRequest(CamelModel):
    """Names are always replaced; the other fields only when given."""

    first_name: Name
    last_name: Name
    email: EmailAddress | None = None
    password: Password | None = None
    is_active: bool | None = None


class UserResponse(CamelModel):
    id: UUID
    username: str
    email: str
    first_name: str
    last_name: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, user: Any) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


__all__ = ["CreateUserRequest", "UpdateUserRequest", "UserResponse"]
