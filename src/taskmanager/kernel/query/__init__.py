"""Kernel query – backend-neutral predicate tree."""
from taskmanager.kernel.query.predicate import (
    ALWAYS,
    Always,
    And,
    Contains,
    Eq,
    Or,
    Predicate,
    Range,
)

__all__ = ["ALWAYS", "Always", "And", "Contains", "Eq", "Or", "Predicate", "Range"]
