"""FastAPI adapter – ASGI middleware.

FastAPICorrelationIdMiddleware
FastAPIRequestLoggingMiddleware
"""
from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import structlog

from taskmanager.observability.correlation import CorrelationContext
from taskmanager.observability.logging import AuditLogger, get_logger

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send

log = get_logger(__name__)


class FastAPICorrelationIdMiddleware:
    """Resolve the request's correlation ID and echo it on the response.

    Header resolution order:
    1. ``X-Correlation-ID``
    2. ``X-Request-ID``
    3. ``traceparent`` (W3C trace-context, trace-id segment)
    4. Generated UUID v4

    The correlation id is bound into structlog's context variables for the
    whole request.
    """

    def __init__(self, app: "ASGIApp", header_name: str = "X-Correlation-ID") -> None:
        self.app = app
        self._response_header = header_name.lower().encode()

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = {k.decode("latin-1"): v.decode("latin-1").strip() for k, v in scope.get("headers", [])}
        ctx = CorrelationContext.from_headers(headers, method=scope.get("method"), path=scope.get("path"))

        structlog.contextvars.clear_contextvars()
        bound: dict[str, Any] = {"correlation_id": ctx.correlation_id}
        if ctx.trace_id is not None:
            bound["trace_id"] = ctx.trace_id
        structlog.contextvars.bind_contextvars(**bound)

        response_header = self._response_header
        encoded_id = ctx.correlation_id.encode("latin-1")

        async def send_with_header(message: Any) -> None:
            if message["type"] == "http.response.start":
                headers_list: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                headers_list.append((response_header, encoded_id))
                message = {**message, "headers": headers_list}
            await send(message)

        await self.app(scope, receive, send_with_header)


class FastAPIRequestLoggingMiddleware:
    """Log one ``http.request`` entry per request with its status and duration.

    Requests slower than ``slow_request_ms`` are additionally reported through
    :meth:`AuditLogger.slow_operation`.
    """

    def __init__(
        self,
        app: "ASGIApp",
        slow_request_ms: float = 500,
        audit: AuditLogger | None = None,
    ) -> None:
        self.app = app
        self._slow_ms = slow_request_ms
        self._audit = audit or AuditLogger()

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "GET")
        path = scope.get("path", "")
        start = time.perf_counter()
        status_code: list[int] = [500]

        async def send_capturing(message: Any) -> None:
            if message["type"] == "http.response.start":
                status_code[0] = message.get("status", 200)
            await send(message)

        try:
            await self.app(scope, receive, send_capturing)
        finally:
            elapsed = (time.perf_counter() - start) * 1000
            log.info(
                "http.request",
                method=method,
                path=path,
                status=status_code[0],
                duration_ms=round(elapsed, 2),
            )
            if elapsed > self._slow_ms:
                self._audit.slow_operation(f"{method} {path}", elapsed, self._slow_ms)


__all__ = ["FastAPICorrelationIdMiddleware", "FastAPIRequestLoggingMiddleware"]
