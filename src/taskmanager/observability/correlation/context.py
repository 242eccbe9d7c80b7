"""Observability – RequestContext, CorrelationContext."""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar
from uuid import uuid4


@dataclasses.dataclass(frozen=True)
class RequestContext:
    """Ambient context for one HTTP request."""

    correlation_id: str
    trace_id: str | None = None
    method: str | None = None
    path: str | None = None

    @classmethod
    def new(cls, **kwargs: str | None) -> "RequestContext":
        return cls(correlation_id=str(uuid4()), **kwargs)


_CTX_VAR: ContextVar[RequestContext | None] = ContextVar("_taskmanager_request_ctx", default=None)


class CorrelationContext:
    """Ambient request context stored in a ``ContextVar``."""

    @staticmethod
    def set(ctx: RequestContext) -> None:
        _CTX_VAR.set(ctx)

    @staticmethod
    def get() -> RequestContext | None:
        return _CTX_VAR.get()

    @staticmethod
    def correlation_id() -> str | None:
        ctx = _CTX_VAR.get()
        return ctx.correlation_id if ctx is not None else None

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)

    @staticmethod
    def from_headers(
        headers: dict[str, str],
        *,
        method: str | None = None,
        path: str | None = None,
    ) -> RequestContext:
        """Build and store a context from HTTP headers.

        The trace id comes from a W3C ``traceparent`` header
        (``ver-trace_id-parent_id-flags``). The correlation id is taken from
        ``X-Correlation-ID``, then ``X-Request-ID``, then the trace id, else
        generated. Header names are matched case-insensitively.
        """
        norm = {k.lower(): v for k, v in headers.items()}

        trace_id: str | None = None
        traceparent = norm.get("traceparent")
        if traceparent:
            parts = traceparent.split("-")
            if len(parts) >= 2 and parts[1]:
                trace_id = parts[1]

        correlation_id = (
            norm.get("x-correlation-id")
            or norm.get("x-request-id")
            or trace_id
            or str(uuid4())
        )

        ctx = RequestContext(correlation_id=correlation_id, trace_id=trace_id, method=method, path=path)
        _CTX_VAR.set(ctx)
        return ctx


__all__ = ["CorrelationContext", "RequestContext"]
