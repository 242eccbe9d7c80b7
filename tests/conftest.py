"""Shared fixtures: a file-backed SQLite database per test and an app client."""
from __future__ import annotations

import itertools
from pathlib import Path
from typing import Any, Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from taskmanager.adapters.fastapi import create_app
from taskmanager.config import AppSettings

_counter = itertools.count()


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'taskmanager.db'}"


@pytest.fixture()
def settings(db_url: str) -> AppSettings:
    return AppSettings(
        database_url=db_url,
        bcrypt_rounds=4,
        json_logs=False,
        log_level="WARNING",
    )


@pytest.fixture()
def client(settings: AppSettings) -> Iterator[TestClient]:
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture()
def create_user(client: TestClient) -> Callable[..., dict[str, Any]]:
    """POST a valid user (unique username/email unless overridden) and return the body."""

    def _create(**overrides: Any) -> dict[str, Any]:
        n = next(_counter)
        payload = {
            "username": f"user{n}",
            "email": f"user{n}@example.com",
            "firstName": "Ada",
            "lastName": "Lovelace",
            "password": "secret123",
            **overrides,
        }
        resp = client.post("/users/", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture()
def create_task(client: TestClient) -> Callable[..., dict[str, Any]]:
    """POST a task owned by *user_id* and return the body."""

    def _create(user_id: str, **overrides: Any) -> dict[str, Any]:
        payload = {"title": "Write report", "userId": user_id, **overrides}
        resp = client.post("/tasks/", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
