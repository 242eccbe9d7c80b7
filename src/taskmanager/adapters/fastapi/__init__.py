"""FastAPI adapter – app factory, middleware, exception mapper, routers, deps."""
from taskmanager.adapters.fastapi.app import create_app
from taskmanager.adapters.fastapi.deps import ActivePagination, Pagination, pagination
from taskmanager.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from taskmanager.adapters.fastapi.middleware import (
    FastAPICorrelationIdMiddleware,
    FastAPIRequestLoggingMiddleware,
)
from taskmanager.adapters.fastapi.routers import FastAPIHealthRouter

__all__ = [
    "ActivePagination",
    "FastAPICorrelationIdMiddleware",
    "FastAPIExceptionMapper",
    "FastAPIHealthRouter",
    "FastAPIRequestLoggingMiddleware",
    "Pagination",
    "create_app",
    "pagination",
]
