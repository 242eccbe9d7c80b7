"""Config settings – Settings base class and AppSettings."""
from __future__ import annotations

import dataclasses
import logging

from taskmanager.config.validation import InvalidSettingValueError

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings.

    Subclasses set ``_prefix``; each field is then read from the environment
    variable ``<PREFIX>_<FIELD_NAME>`` by :class:`EnvSettingsLoader`.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class AppSettings(Settings):
    """Runtime settings of the task manager service."""

    _prefix: dataclasses.ClassVar[str] = "TASKMANAGER"

    database_url: str = "sqlite+aiosqlite:///./taskmanager.db"
    echo_sql: bool = False
    create_schema: bool = True
    log_level: str = "INFO"
    json_logs: bool = True
    slow_request_ms: int = 500
    bcrypt_rounds: int = 12
    host: str = "127.0.0.1"
    port: int = 8080

    def _validate(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise InvalidSettingValueError("log_level", self.log_level, f"must be one of {sorted(_LOG_LEVELS)}")
        if "+" not in self.database_url.split("://", 1)[0]:
            raise InvalidSettingValueError(
                "database_url", self.database_url, "an async driver is required (e.g. sqlite+aiosqlite)"
            )
        if self.slow_request_ms <= 0:
            raise InvalidSettingValueError("slow_request_ms", self.slow_request_ms, "must be positive")
        # bcrypt accepts cost factors 4..31
        if not 4 <= self.bcrypt_rounds <= 31:
            raise InvalidSettingValueError("bcrypt_rounds", self.bcrypt_rounds, "must be between 4 and 31")
        if not 0 < self.port < 65536:
            raise InvalidSettingValueError("port", self.port, "must be a TCP port number")

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


__all__ = ["AppSettings", "Settings"]
