"""Application pagination – PageRequest, Sort, SortDirection."""
from __future__ import annotations

import dataclasses
from enum import Enum

from taskmanager.kernel.errors import ValidationError

MAX_PAGE_SIZE = 1000


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclasses.dataclass(frozen=True)
class Sort:
    """Single sort criterion."""
    field: str
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def parse(cls, expression: str) -> "Sort":
        """Parse ``"field,direction"``.

        The direction is ascending only when it reads ``asc`` (any case);
        anything else, including a missing direction, sorts descending.
        """
        parts = [part.strip() for part in expression.split(",")]
        if not parts[0]:
            raise ValidationError.for_field("sort", f"Invalid sort expression {expression!r}")
        direction = (
            SortDirection.ASC
            if len(parts) > 1 and parts[1].lower() == "asc"
            else SortDirection.DESC
        )
        return cls(parts[0], direction)

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset-based pagination parameters; ``page`` is zero-based."""
    page: int = 0
    size: int = 10
    sorts: tuple[Sort, ...] = ()

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValidationError.for_field("page", "page must be >= 0")
        if self.size < 1 or self.size > MAX_PAGE_SIZE:
            raise ValidationError.for_field("size", f"size must be between 1 and {MAX_PAGE_SIZE}")

    @classmethod
    def of(cls, page: int, size: int, *sort: str) -> "PageRequest":
        """Build a request from ``"field,direction"`` expressions, in order."""
        return cls(page=page, size=size, sorts=tuple(Sort.parse(e) for e in sort))

    @property
    def offset(self) -> int:
        return self.page * self.size


__all__ = ["MAX_PAGE_SIZE", "PageRequest", "Sort", "SortDirection"]
