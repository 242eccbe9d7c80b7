"""SQLAlchemy adapter – lower a predicate tree into a WHERE clause.

Field names in the tree resolve to mapped attributes of the target model,
so the same tree works for any model exposing those attributes.

Substring matches compile to ``lower(col) LIKE '%pattern%'`` with the LIKE
wildcards of the pattern escaped, so user input is always matched
literally.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import and_, false, func, or_, true
from sqlalchemy.sql.elements import ColumnElement

from taskmanager.kernel.query import Always, And, Contains, Eq, Or, Predicate, Range

LIKE_ESCAPE = "\\"


def escape_like(value: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape ``%``, ``_`` and the escape character itself."""
    return (
        value.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


def _column(model: Any, field: str) -> Any:
    try:
        return getattr(model, field)
    except AttributeError:
        raise ValueError(f"{model.__name__} has no attribute {field!r}") from None


def compile_predicate(predicate: Predicate, model: Any) -> ColumnElement[bool]:
    """Return a boolean column expression equivalent to *predicate*."""
    match predicate:
        case Always():
            return true()
        case Eq(field=field, value=value):
            return _column(model, field) == value
        case Range(field=field, lower=lower, upper=upper):
            column = _column(model, field)
            bounds = []
            if lower is not None:
                bounds.append(column >= lower)
            if upper is not None:
                bounds.append(column <= upper)
            if not bounds:
                # an open range still excludes NULL
                return column.is_not(None)
            return and_(*bounds)
        case Contains(field=field, pattern=pattern):
            like = f"%{escape_like(pattern.lower())}%"
            return func.lower(_column(model, field)).like(like, escape=LIKE_ESCAPE)
        case Or(operands=operands):
            if not operands:
                return false()
            return or_(*(compile_predicate(op, model) for op in operands))
        case And(operands=operands):
            if not operands:
                return true()
            return and_(*(compile_predicate(op, model) for op in operands))
        case _:
            raise TypeError(f"Unsupported predicate node: {type(predicate).__name__}")


__all__ = ["LIKE_ESCAPE", "compile_predicate", "escape_like"]
