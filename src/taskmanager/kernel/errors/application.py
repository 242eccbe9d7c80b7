"""Application-layer errors: cross-cutting concerns at use-case level."""

from __future__ import annotations

from taskmanager.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern (configuration, wiring)."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
