"""SQLAlchemy adapter – ORM models for users and tasks."""
from __future__ import annotations

import datetime
import uuid

from sqlalchemy import DateTime, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from taskmanager.adapters.sqlalchemy.mixins import SoftDeleteMixin, TimestampMixin
from taskmanager.tasks.enums import TaskPriority, TaskStatus


class Base(DeclarativeBase):
    pass


class UserModel(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"UserModel(id={self.id!r}, username={self.username!r})"


class TaskModel(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    priority: Mapped[TaskPriority] = mapped_column(
        Enum(TaskPriority, native_enum=False, length=20),
        nullable=False,
        index=True,
    )
    status: Mapped[TaskStatus] = mapped_column(
        Enum(TaskStatus, native_enum=False, length=20),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", name="fk_tasks_user"),
        nullable=False,
        index=True,
    )
    due_date: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=False),
        nullable=True,
    )

    # many-to-one, loaded with the task so responses can carry the username
    user: Mapped[UserModel] = relationship(lazy="joined")

    def __repr__(self) -> str:  # pragma: no cover
        return f"TaskModel(id={self.id!r}, title={self.title!r})"


__all__ = ["Base", "TaskModel", "UserModel"]
