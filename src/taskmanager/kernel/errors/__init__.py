"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── ValidationError
    │   ├── NotFoundError
    │   └── ConflictError
    ├── ApplicationError     (application.py)
    └── InfrastructureError  (infrastructure.py)
        └── PersistenceError
"""

from taskmanager.kernel.errors.application import ApplicationError
from taskmanager.kernel.errors.base import BaseError
from taskmanager.kernel.errors.domain import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from taskmanager.kernel.errors.infrastructure import InfrastructureError, PersistenceError

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConflictError",
    "DomainError",
    "InfrastructureError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
]
