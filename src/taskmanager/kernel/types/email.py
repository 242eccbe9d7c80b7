"""Email address validation shared by request schemas."""

from __future__ import annotations

import re
from typing import Final

_EMAIL_PATTERN: Final = re.compile(
    r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$"
)

MAX_EMAIL_LENGTH: Final = 100


def is_valid_email(value: str) -> bool:
    return len(value) <= MAX_EMAIL_LENGTH and _EMAIL_PATTERN.match(value) is not None


def check_email(value: str) -> str:
    """Pydantic ``AfterValidator`` hook: return the trimmed address or raise ``ValueError``."""
    value = value.strip()
    if len(value) > MAX_EMAIL_LENGTH:
        raise ValueError(f"Email must not exceed {MAX_EMAIL_LENGTH} characters")
    if not is_valid_email(value):
        raise ValueError("Email should be valid")
    return value


__all__ = ["MAX_EMAIL_LENGTH", "check_email", "is_valid_email"]
