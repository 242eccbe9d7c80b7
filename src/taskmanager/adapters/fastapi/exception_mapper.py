"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

import datetime
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmanager.kernel.errors import (
    BaseError,
    ConflictError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)
from taskmanager.observability.correlation import CorrelationContext
from taskmanager.observability.logging import get_logger

log = get_logger(__name__)

# Location prefixes FastAPI puts in front of the offending field name.
_LOCATION_PARTS = frozenset({"body", "query", "path", "header", "cookie"})


def _field_name(loc: tuple[Any, ...]) -> str:
    parts = [str(p) for p in loc if p not in _LOCATION_PARTS]
    return ".".join(parts) if parts else "request"


def request_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Flatten pydantic errors into ``{"field", "message"}`` pairs."""
    return [
        {"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]


def error_body(
    request: Request,
    status: int,
    code: str,
    message: str,
    detail: dict[str, Any] | None = None,
    errors: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
        "status": status,
        "code": code,
        "message": message,
        "detail": detail or {},
    }
    if errors is not None:
        body["errors"] = errors
    body["path"] = request.url.path
    body["correlation_id"] = CorrelationContext.correlation_id()
    return body


class FastAPIExceptionMapper:
    """Register error → HTTP status mappings on a FastAPI app.

    Mappings
    --------
    ``ValidationError``, request validation failures → 400
    ``NotFoundError``                                → 404
    ``ConflictError``, ``IntegrityError``            → 409
    ``InfrastructureError``                          → 503
    any other exception                              → 500
    """

    def __init__(self) -> None:
        # Starlette resolves handlers along the exception's MRO, so each
        # subtype gets its own entry.
        self._map: list[tuple[type[BaseError], int]] = [
            (ValidationError, 400),
            (NotFoundError, 404),
            (ConflictError, 409),
            (InfrastructureError, 503),
            (BaseError, 500),
        ]

    def register(self, app: FastAPI) -> None:
        for exc_type, status in self._map:
            app.add_exception_handler(exc_type, self._domain_handler(status))
        app.add_exception_handler(RequestValidationError, self._request_validation)
        app.add_exception_handler(IntegrityError, self._integrity)
        app.add_exception_handler(StarletteHTTPException, self._http)
        app.add_exception_handler(Exception, self._unexpected)

    @staticmethod
    def _domain_handler(status: int) -> Callable[[Request, BaseError], Any]:
        async def handler(request: Request, exc: BaseError) -> JSONResponse:
            log_method = log.error if status >= 500 else log.warning
            log_method("http.error", status=status, code=exc.code, error=exc.message, path=request.url.path)
            errors = exc.errors if isinstance(exc, ValidationError) else None
            return JSONResponse(
                status_code=status,
                content=error_body(request, status, exc.code, exc.message, exc.detail, errors),
            )

        return handler

    @staticmethod
    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = request_validation_errors(exc)
        log.warning("http.invalid_request", path=request.url.path, fields=[e["field"] for e in errors])
        return JSONResponse(
            status_code=400,
            content=error_body(request, 400, "validation_error", "Validation failed", errors=errors),
        )

    @staticmethod
    async def _integrity(request: Request, exc: IntegrityError) -> JSONResponse:
        log.warning("http.integrity_violation", path=request.url.path, error=type(exc).__name__)
        return JSONResponse(
            status_code=409,
            content=error_body(
                request, 409, "data_integrity_violation", "The change conflicts with existing data"
            ),
        )

    @staticmethod
    async def _http(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        code = "not_found" if exc.status_code == 404 else "http_error"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(request, exc.status_code, code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @staticmethod
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        log.error("http.unhandled_error", path=request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=error_body(request, 500, "internal_error", "An unexpected error occurred"),
        )


__all__ = ["FastAPIExceptionMapper", "error_body", "request_validation_errors"]
