"""Kernel value types."""
from taskmanager.kernel.types.datetimes import to_naive_utc
from taskmanager.kernel.types.email import MAX_EMAIL_LENGTH, check_email, is_valid_email

__all__ = ["MAX_EMAIL_LENGTH", "check_email", "is_valid_email", "to_naive_utc"]
