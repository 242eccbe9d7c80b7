"""Application pagination – page/sort primitives."""
from taskmanager.application.pagination.page import Page
from taskmanager.application.pagination.page_request import (
    MAX_PAGE_SIZE,
    PageRequest,
    Sort,
    SortDirection,
)

__all__ = ["MAX_PAGE_SIZE", "Page", "PageRequest", "Sort", "SortDirection"]
