"""Application pagination – Page."""
from __future__ import annotations

import dataclasses
import math
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


@dataclasses.dataclass
class Page(Generic[T]):
    """One page of results plus the totals of the whole result set."""

    content: list[T]
    number: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0 or self.total_elements <= 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    @property
    def first(self) -> bool:
        return self.number == 0

    @property
    def last(self) -> bool:
        return not self.has_next

    @property
    def empty(self) -> bool:
        return not self.content

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    def map(self, fn: Callable[[T], Any]) -> "Page[Any]":
        """Return a new :class:`Page` with each item transformed by *fn*."""
        return Page(
            content=[fn(item) for item in self.content],
            number=self.number,
            size=self.size,
            total_elements=self.total_elements,
        )


__all__ = ["Page"]
