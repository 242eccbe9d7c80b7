"""Application DTO helpers – camelCase wire models and the page envelope."""
from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from taskmanager.application.pagination import Page

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for request/response bodies: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageResponse(CamelModel, Generic[T]):
    content: list[T]
    page_number: int
    page_size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool
    empty: bool

    @classmethod
    def from_page(cls, page: Page[Any], fn: Callable[[Any], T]) -> "PageResponse[T]":
        mapped = page.map(fn)
        return cls(
            content=mapped.content,
            page_number=mapped.number,
            page_size=mapped.size,
            total_elements=mapped.total_elements,
            total_pages=mapped.total_pages,
            first=mapped.first,
            last=mapped.last,
            empty=mapped.empty,
        )


__all__ = ["CamelModel", "PageResponse"]
