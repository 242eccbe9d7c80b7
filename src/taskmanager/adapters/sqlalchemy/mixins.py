"""SQLAlchemy ORM mixins – TimestampMixin, SoftDeleteMixin."""
from __future__ import annotations

import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime.datetime:
    """Current UTC time as a naive datetime (the storage convention)."""
    return datetime.datetime.now(datetime.UTC).replace(tzinfo=None)


class TimestampMixin:
    """Adds ``created_at`` and ``updated_at`` columns.

    Both are set in Python rather than by the server so the ORM knows the
    values right after a flush; ``updated_at`` is refreshed on every UPDATE.
    """

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=False),
        default=utcnow,
        nullable=False,
        index=True,
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=False),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )


class SoftDeleteMixin:
    """Adds an ``is_active`` flag; soft-deleted rows keep ``is_active = false``.

    Usage::

        stmt = select(UserModel).where(UserModel.active_filter())
    """

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        index=True,
    )

    @classmethod
    def active_filter(cls) -> Any:
        """Return the column expression ``<cls>.is_active IS TRUE``."""
        return cls.is_active.is_(True)  # type: ignore[attr-defined]

    def soft_delete(self) -> None:
        self.is_active = False


__all__ = ["SoftDeleteMixin", "TimestampMixin", "utcnow"]
