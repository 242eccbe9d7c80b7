"""Infrastructure errors: I/O failures in the persistence layer."""

from __future__ import annotations

from typing import Any

from taskmanager.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class PersistenceError(InfrastructureError):
    """The database could not be reached or rejected the statement."""

    default_code = "database_error"

    def __init__(
        self,
        message: str = "A database error occurred",
        *,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.operation = operation


__all__ = ["InfrastructureError", "PersistenceError"]
