"""Unit tests for structured logging: redaction, audit events, processors."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterator

import pytest
import structlog

from taskmanager.observability.correlation import CorrelationContext, RequestContext
from taskmanager.observability.logging import (
    DEFAULT_SENSITIVE_FIELDS,
    AuditAction,
    AuditEntity,
    AuditLogger,
    CorrelationProcessor,
    JsonLoggerFactory,
    SensitiveFieldsFilter,
)


class RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def info(self, event: str, **kw: Any) -> None:
        self.events.append(("info", event, kw))

    def warning(self, event: str, **kw: Any) -> None:
        self.events.append(("warning", event, kw))


@pytest.fixture()
def recorder() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture()
def audit(recorder: RecordingLogger) -> AuditLogger:
    return AuditLogger(logger=recorder)


@pytest.fixture()
def _clean_context() -> Iterator[None]:
    CorrelationContext.clear()
    yield
    CorrelationContext.clear()


# ---------------------------------------------------------------------------
# SensitiveFieldsFilter
# ---------------------------------------------------------------------------


class TestSensitiveFieldsFilter:
    def test_default_fields(self) -> None:
        assert {"password", "token", "authorization"} <= DEFAULT_SENSITIVE_FIELDS

    def test_redacts_top_level_case_insensitive(self) -> None:
        result = SensitiveFieldsFilter().redact({"Password": "hunter2", "username": "ada"})
        assert result == {"Password": "[REDACTED]", "username": "ada"}

    def test_redacts_nested_dicts_and_lists(self) -> None:
        data = {"body": {"password": "x", "users": [{"token": "t", "id": 1}, "plain"]}}
        result = SensitiveFieldsFilter().redact(data)
        assert result == {"body": {"password": "[REDACTED]", "users": [{"token": "[REDACTED]", "id": 1}, "plain"]}}

    def test_input_is_not_mutated(self) -> None:
        data = {"password": "x"}
        SensitiveFieldsFilter().redact(data)
        assert data == {"password": "x"}

    def test_custom_fields(self) -> None:
        flt = SensitiveFieldsFilter(frozenset({"PIN"}))
        assert flt.is_sensitive("pin")
        assert not flt.is_sensitive("password")

    def test_works_as_processor(self) -> None:
        event = SensitiveFieldsFilter()(None, "info", {"event": "login", "secret": "s"})
        assert event == {"event": "login", "secret": "[REDACTED]"}


# ---------------------------------------------------------------------------
# AuditLogger
# ---------------------------------------------------------------------------


class TestAuditLogger:
    def test_log_event_fields(self, audit: AuditLogger, recorder: RecordingLogger) -> None:
        audit.log_event(AuditEntity.TASK, AuditAction.CREATE, 7, extra="x")
        [(level, event, kw)] = recorder.events
        assert level == "info"
        assert event == "audit.task.create"
        assert kw["service"] == "taskmanager"
        assert kw["entity_type"] == "task"
        assert kw["entity_id"] == "7"
        assert kw["action"] == "create"
        assert kw["extra"] == "x"
        assert kw["timestamp"].endswith("+00:00")

    def test_task_events(self, audit: AuditLogger, recorder: RecordingLogger) -> None:
        audit.task_created("t1", "Report", "u1")
        audit.task_updated("t1", "Report", {"status": "DONE", "priority": "HIGH"})
        audit.task_deleted("t1", "Report")
        audit.task_deleted("t1", "Report", hard=True)
        assert [e[1] for e in recorder.events] == [
            "audit.task.create",
            "audit.task.update",
            "audit.task.delete",
            "audit.task.hard_delete",
        ]
        assert recorder.events[0][2]["user_id"] == "u1"
        assert recorder.events[1][2]["changes"] == ["priority", "status"]

    def test_user_events_never_carry_values(self, audit: AuditLogger, recorder: RecordingLogger) -> None:
        audit.user_created("u1", "ada")
        audit.user_updated("u1", "ada", {"password": True, "email": "new@example.com"})
        audit.user_deleted("u1", "ada", hard=True)
        assert [e[1] for e in recorder.events] == ["audit.user.create", "audit.user.update", "audit.user.hard_delete"]
        assert recorder.events[1][2]["changes"] == ["email", "password"]
        assert "new@example.com" not in str(recorder.events)

    def test_slow_operation_is_a_warning(self, audit: AuditLogger, recorder: RecordingLogger) -> None:
        audit.slow_operation("GET /tasks", 812.3456, 500)
        [(level, event, kw)] = recorder.events
        assert (level, event) == ("warning", "audit.slow_operation")
        assert kw == {"service": "taskmanager", "operation": "GET /tasks", "duration_ms": 812.35, "threshold_ms": 500}

    def test_custom_service_name(self, recorder: RecordingLogger) -> None:
        AuditLogger(service="billing", logger=recorder).user_created("u", "x")
        assert recorder.events[0][2]["service"] == "billing"


# ---------------------------------------------------------------------------
# CorrelationProcessor
# ---------------------------------------------------------------------------


@pytest.mark.usefixtures("_clean_context")
class TestCorrelationProcessor:
    def test_no_context_leaves_event_alone(self) -> None:
        assert CorrelationProcessor()(None, "info", {"event": "x"}) == {"event": "x"}

    def test_injects_context_ids(self) -> None:
        CorrelationContext.set(RequestContext(correlation_id="c-1", trace_id="t-1"))
        event = CorrelationProcessor()(None, "info", {"event": "x"})
        assert event == {"event": "x", "correlation_id": "c-1", "trace_id": "t-1"}

    def test_existing_values_win(self) -> None:
        CorrelationContext.set(RequestContext(correlation_id="c-1"))
        event = CorrelationProcessor()(None, "info", {"event": "x", "correlation_id": "explicit"})
        assert event == {"event": "x", "correlation_id": "explicit"}


# ---------------------------------------------------------------------------
# JsonLoggerFactory
# ---------------------------------------------------------------------------


@pytest.fixture()
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.mark.usefixtures("_restore_root_logger", "_clean_context")
class TestJsonLoggerFactory:
    def _last_json(self, capsys: pytest.CaptureFixture[str]) -> dict[str, Any]:
        lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
        return json.loads(lines[-1])

    def test_structlog_events_render_as_redacted_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure("info")
        CorrelationContext.set(RequestContext(correlation_id="corr-9"))
        structlog.get_logger("tests.json").info("user.login", username="ada", password="hunter2")
        record = self._last_json(capsys)
        assert record["event"] == "user.login"
        assert record["level"] == "info"
        assert record["logger"] == "tests.json"
        assert record["password"] == "[REDACTED]"
        assert record["correlation_id"] == "corr-9"
        assert "timestamp" in record

    def test_stdlib_records_share_the_pipeline(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(logging.INFO)
        logging.getLogger("uvicorn.error").warning("port in use")
        record = self._last_json(capsys)
        assert record["event"] == "port in use"
        assert record["level"] == "warning"

    def test_level_filters_records(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure("WARNING")
        logging.getLogger("quiet").info("hidden")
        assert capsys.readouterr().err == ""
        assert logging.getLogger().level == logging.WARNING
