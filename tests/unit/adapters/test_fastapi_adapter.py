"""Unit tests for the FastAPI adapter plumbing: middleware, error mapping, health, paging."""
from __future__ import annotations

import asyncio
import time
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmanager.adapters.fastapi import (
    FastAPICorrelationIdMiddleware,
    FastAPIExceptionMapper,
    FastAPIHealthRouter,
    FastAPIRequestLoggingMiddleware,
    Pagination,
)
from taskmanager.application.pagination import PageRequest
from taskmanager.kernel.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from taskmanager.observability.correlation import CorrelationContext
from taskmanager.observability.logging import AuditLogger


class RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def info(self, event: str, **kw: Any) -> None:
        self.events.append(("info", event, kw))

    def warning(self, event: str, **kw: Any) -> None:
        self.events.append(("warning", event, kw))


class Item(BaseModel):
    name: str
    quantity: int


def _error_app() -> FastAPI:
    app = FastAPI()
    FastAPIExceptionMapper().register(app)
    app.add_middleware(FastAPICorrelationIdMiddleware)

    errors: dict[str, Exception] = {
        "validation": ValidationError.for_field("title", "must not be blank"),
        "not-found": NotFoundError("Task", "42"),
        "conflict": ConflictError("Username already exists: ada", code="user_already_exists"),
        "domain": DomainError("No"),
        "persistence": PersistenceError(),
        "integrity": IntegrityError("INSERT", {}, Exception("unique")),
        "boom": RuntimeError("kaboom"),
    }

    @app.get("/raise/{kind}")
    async def raise_(kind: str) -> None:
        raise errors[kind]

    @app.post("/items")
    async def create_item(item: Item) -> Item:
        return item

    @app.get("/context")
    async def context() -> dict[str, Any]:
        ctx = CorrelationContext.get()
        assert ctx is not None
        return {"correlation_id": ctx.correlation_id, "trace_id": ctx.trace_id, "path": ctx.path}

    return app


@pytest.fixture()
def error_client() -> TestClient:
    return TestClient(_error_app(), raise_server_exceptions=False)


class TestExceptionMapper:
    @pytest.mark.parametrize(
        ("kind", "status", "code"),
        [
            ("validation", 400, "validation_error"),
            ("not-found", 404, "not_found"),
            ("conflict", 409, "user_already_exists"),
            ("domain", 500, "domain_error"),
            ("persistence", 503, "database_error"),
            ("integrity", 409, "data_integrity_violation"),
            ("boom", 500, "internal_error"),
        ],
    )
    def test_status_mapping(self, error_client: TestClient, kind: str, status: int, code: str) -> None:
        resp = error_client.get(f"/raise/{kind}")
        assert resp.status_code == status
        body = resp.json()
        assert body["status"] == status
        assert body["code"] == code
        assert body["path"] == f"/raise/{kind}"

    def test_body_shape(self, error_client: TestClient) -> None:
        body = error_client.get("/raise/not-found", headers={"X-Correlation-ID": "corr-1"}).json()
        assert set(body) == {"timestamp", "status", "code", "message", "detail", "path", "correlation_id"}
        assert body["message"] == "Task not found with id: 42"
        assert body["correlation_id"] == "corr-1"

    def test_domain_validation_lists_errors(self, error_client: TestClient) -> None:
        body = error_client.get("/raise/validation").json()
        assert body["errors"] == [{"field": "title", "message": "must not be blank"}]

    def test_request_validation_lists_each_field(self, error_client: TestClient) -> None:
        resp = error_client.post("/items", json={"quantity": "many"})
        assert resp.status_code == 400
        body = resp.json()
        assert body["message"] == "Validation failed"
        assert {e["field"] for e in body["errors"]} == {"name", "quantity"}

    def test_malformed_json_is_400(self, error_client: TestClient) -> None:
        resp = error_client.post("/items", content=b"{not json", headers={"content-type": "application/json"})
        assert resp.status_code == 400

    def test_unknown_route_is_404(self, error_client: TestClient) -> None:
        resp = error_client.get("/nowhere")
        assert resp.status_code == 404
        assert resp.json()["code"] == "not_found"

    def test_unexpected_error_hides_details(self, error_client: TestClient) -> None:
        body = error_client.get("/raise/boom").json()
        assert body["message"] == "An unexpected error occurred"
        assert "kaboom" not in str(body)

    def test_http_exception_passthrough(self) -> None:
        app = FastAPI()
        FastAPIExceptionMapper().register(app)

        @app.get("/teapot")
        async def teapot() -> None:
            raise StarletteHTTPException(status_code=418, detail="short and stout")

        resp = TestClient(app).get("/teapot")
        assert resp.status_code == 418
        assert resp.json()["code"] == "http_error"
        assert resp.json()["message"] == "short and stout"


class TestCorrelationMiddleware:
    def test_generates_id_when_absent(self, error_client: TestClient) -> None:
        resp = error_client.get("/context")
        generated = resp.headers["x-correlation-id"]
        assert len(generated) == 36
        assert resp.json()["correlation_id"] == generated
        assert resp.json()["path"] == "/context"

    def test_echoes_incoming_id(self, error_client: TestClient) -> None:
        resp = error_client.get("/context", headers={"X-Correlation-ID": "abc-123"})
        assert resp.headers["x-correlation-id"] == "abc-123"

    def test_falls_back_to_request_id(self, error_client: TestClient) -> None:
        resp = error_client.get("/context", headers={"X-Request-ID": "req-9"})
        assert resp.headers["x-correlation-id"] == "req-9"

    def test_traceparent_supplies_trace_id(self, error_client: TestClient) -> None:
        trace = "4bf92f3577b34da6a3ce929d0e0e4736"
        resp = error_client.get("/context", headers={"traceparent": f"00-{trace}-00f067aa0ba902b7-01"})
        assert resp.json()["trace_id"] == trace
        assert resp.headers["x-correlation-id"] == trace

    def test_explicit_id_wins_over_traceparent(self, error_client: TestClient) -> None:
        resp = error_client.get(
            "/context",
            headers={"X-Correlation-ID": "mine", "traceparent": "00-abc-def-01"},
        )
        assert resp.json() == {"correlation_id": "mine", "trace_id": "abc", "path": "/context"}

    def test_custom_response_header(self) -> None:
        app = FastAPI()
        app.add_middleware(FastAPICorrelationIdMiddleware, header_name="X-Trace")

        @app.get("/")
        async def root() -> dict[str, str]:
            return {}

        resp = TestClient(app).get("/", headers={"X-Correlation-ID": "zzz"})
        assert resp.headers["x-trace"] == "zzz"


class TestRequestLoggingMiddleware:
    def _app(self, slow_ms: float, audit: AuditLogger) -> FastAPI:
        app = FastAPI()
        app.add_middleware(FastAPIRequestLoggingMiddleware, slow_request_ms=slow_ms, audit=audit)

        @app.get("/sleepy")
        async def sleepy() -> dict[str, str]:
            await asyncio.sleep(0.02)
            return {"status": "ok"}

        return app

    def test_slow_request_is_audited(self) -> None:
        recorder = RecordingLogger()
        TestClient(self._app(1, AuditLogger(logger=recorder))).get("/sleepy")
        [(level, event, kw)] = recorder.events
        assert (level, event) == ("warning", "audit.slow_operation")
        assert kw["operation"] == "GET /sleepy"
        assert kw["threshold_ms"] == 1
        assert kw["duration_ms"] >= 1

    def test_fast_request_is_not_audited(self) -> None:
        recorder = RecordingLogger()
        TestClient(self._app(60_000, AuditLogger(logger=recorder))).get("/sleepy")
        assert recorder.events == []


class TestHealthRouter:
    def _client(self, *checks: Any) -> TestClient:
        app = FastAPI()
        app.include_router(FastAPIHealthRouter(readiness_checks=list(checks)))
        return TestClient(app)

    def test_liveness(self) -> None:
        resp = self._client().get("/health/live")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_ready_when_checks_pass(self) -> None:
        async def database() -> bool:
            return True

        resp = self._client(database).get("/health/ready")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "checks": {"database": True}}

    def test_degraded_when_check_fails_or_raises(self) -> None:
        async def database() -> bool:
            return False

        async def cache() -> bool:
            raise ConnectionError("refused")

        resp = self._client(database, cache).get("/health/ready")
        assert resp.status_code == 503
        assert resp.json() == {"status": "degraded", "checks": {"database": False, "cache": False}}

    def test_app_readiness_pings_database(self, client: TestClient) -> None:
        resp = client.get("/health/ready")
        assert resp.status_code == 200
        assert resp.json()["checks"] == {"database": True}


class TestPaginationDependency:
    @pytest.fixture()
    def paging_client(self) -> TestClient:
        app = FastAPI()
        FastAPIExceptionMapper().register(app)

        @app.get("/paged")
        async def paged(page: Pagination) -> dict[str, Any]:
            return {
                "page": page.page,
                "size": page.size,
                "sorts": [[s.field, s.direction.value] for s in page.sorts],
            }

        return TestClient(app)

    def test_defaults(self, paging_client: TestClient) -> None:
        assert paging_client.get("/paged").json() == {
            "page": 0,
            "size": 10,
            "sorts": [["createdAt", "DESC"]],
        }

    def test_explicit_values(self, paging_client: TestClient) -> None:
        resp = paging_client.get("/paged", params=[("page", 2), ("size", 3), ("sort", "title,asc"), ("sort", "status")])
        assert resp.json() == {"page": 2, "size": 3, "sorts": [["title", "ASC"], ["status", "DESC"]]}

    def test_blank_sort_is_400(self, paging_client: TestClient) -> None:
        resp = paging_client.get("/paged", params={"sort": ",asc"})
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "sort"

    def test_offset(self) -> None:
        assert PageRequest(page=3, size=7).offset == 21


def test_timestamps_are_iso(error_client: TestClient) -> None:
    body = error_client.get("/raise/not-found").json()
    assert time.strptime(body["timestamp"][:19], "%Y-%m-%dT%H:%M:%S")
