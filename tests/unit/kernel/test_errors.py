"""Unit tests for the kernel error hierarchy."""

from __future__ import annotations

import json

import pytest

from taskmanager.config import ConfigError
from taskmanager.kernel.errors import (
    ApplicationError,
    BaseError,
    ConflictError,
    DomainError,
    InfrastructureError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)


class TestBaseError:
    def test_message_and_default_code(self) -> None:
        err = BaseError("something went wrong")
        assert err.message == "something went wrong"
        assert err.code == "base_error"
        assert str(err) == "something went wrong"

    def test_custom_code(self) -> None:
        assert BaseError("m", code="custom").code == "custom"

    def test_to_dict(self) -> None:
        err = BaseError("m", code="c", detail={"k": 1})
        assert err.to_dict() == {"code": "c", "message": "m", "detail": {"k": 1}}

    def test_to_json_is_valid_json(self) -> None:
        payload = json.loads(BaseError("m", detail={"when": object()}).to_json())
        assert payload["message"] == "m"
        assert "when" in payload["detail"]

    def test_with_detail_returns_self(self) -> None:
        err = BaseError("m")
        assert err.with_detail(task_id="42") is err
        assert err.detail == {"task_id": "42"}

    def test_cause_is_chained(self) -> None:
        original = RuntimeError("boom")
        err = BaseError("wrapped", cause=original)
        assert err.cause is original
        assert err.__cause__ is original

    def test_repr_names_class_and_code(self) -> None:
        assert repr(NotFoundError("Task")) == "NotFoundError(code='not_found', message='Task not found')"


class TestHierarchy:
    @pytest.mark.parametrize(
        ("error_cls", "parent"),
        [
            (ValidationError, DomainError),
            (NotFoundError, DomainError),
            (ConflictError, DomainError),
            (ConfigError, ApplicationError),
            (PersistenceError, InfrastructureError),
            (DomainError, BaseError),
        ],
    )
    def test_subclassing(self, error_cls: type, parent: type) -> None:
        assert issubclass(error_cls, parent)


class TestValidationError:
    def test_errors_default_empty(self) -> None:
        err = ValidationError("bad")
        assert err.errors == []
        assert err.to_dict()["errors"] == []

    def test_for_field(self) -> None:
        err = ValidationError.for_field("sort", "No property 'x'")
        assert err.code == "validation_error"
        assert err.errors == [{"field": "sort", "message": "No property 'x'"}]


class TestNotFoundError:
    def test_message_with_identifier(self) -> None:
        err = NotFoundError("Task", "abc")
        assert err.message == "Task not found with id: abc"
        assert err.resource == "Task"
        assert err.identifier == "abc"

    def test_message_by_other_key(self) -> None:
        err = NotFoundError("User", "ada", by="username")
        assert err.message == "User not found with username: ada"


class TestOtherErrors:
    def test_persistence_error_defaults(self) -> None:
        err = PersistenceError(operation="OperationalError")
        assert err.message == "A database error occurred"
        assert err.code == "database_error"
        assert err.operation == "OperationalError"
