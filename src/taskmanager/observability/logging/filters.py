"""Observability – SensitiveFieldsFilter."""
from __future__ import annotations

from typing import Any

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "password", "new_password", "current_password", "passwd", "secret",
    "token", "authorization", "password_hash",
})


class SensitiveFieldsFilter:
    """Replace values of sensitive keys with ``[REDACTED]``.

    Usable directly as a structlog processor.
    """

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = frozenset(f.lower() for f in (sensitive_fields or DEFAULT_SENSITIVE_FIELDS))

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        return self.redact(event_dict)

    def is_sensitive(self, key: str) -> bool:
        return key.lower() in self._fields

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        """Recursively redact nested dicts and lists of dicts."""
        result: dict[str, Any] = {}
        for k, v in data.items():
            if self.is_sensitive(k):
                result[k] = self.REDACTED
            elif isinstance(v, dict):
                result[k] = self.redact(v)
            elif isinstance(v, list):
                result[k] = [self.redact(i) if isinstance(i, dict) else i for i in v]
            else:
                result[k] = v
        return result


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter"]
