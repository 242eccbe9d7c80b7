"""Timestamp normalisation; stored timestamps are naive UTC."""
from __future__ import annotations

from datetime import datetime, timezone


def to_naive_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


__all__ = ["to_naive_utc"]
