"""Predicate tree: composable boolean conditions over one record type.

A predicate is a small immutable expression tree::

    Always                       tautology, the unit of conjunction
    Eq(field, value)             field == value
    Range(field, lower, upper)   lower <= field <= upper, either bound optional
    Contains(field, pattern)     lower(field) contains lower(pattern)
    Or(operands) / And(operands)

Trees are backend-neutral. ``is_satisfied_by`` evaluates one in memory
against any object exposing the referenced attributes; query adapters
lower the same tree into their own language (see
``taskmanager.adapters.sqlalchemy.predicate``).

Example::

    p = Eq("status", "PENDING") & Range("due_date", lower=start)
    p.is_satisfied_by(task)
"""

from __future__ import annotations

import abc
import dataclasses
from typing import Any


class Predicate(abc.ABC):
    """Abstract base for predicate nodes: provides the combinators."""

    @abc.abstractmethod
    def is_satisfied_by(self, candidate: Any) -> bool: ...

    @property
    def is_tautology(self) -> bool:
        """``True`` when the predicate can never narrow a result set."""
        return False

    # Named combinators ------------------------------------------------
    def and_(self, other: "Predicate") -> "And":
        return And.of(self, other)

    def or_(self, other: "Predicate") -> "Or":
        return Or.of(self, other)

    # Operator overloads -----------------------------------------------
    def __and__(self, other: "Predicate") -> "And":
        return And.of(self, other)

    def __or__(self, other: "Predicate") -> "Or":
        return Or.of(self, other)


def _read(candidate: Any, field: str) -> Any:
    if isinstance(candidate, dict):
        return candidate.get(field)
    return getattr(candidate, field, None)


@dataclasses.dataclass(frozen=True)
class Always(Predicate):
    """Matches every record."""

    def is_satisfied_by(self, candidate: Any) -> bool:  # noqa: ARG002
        return True

    @property
    def is_tautology(self) -> bool:
        return True


ALWAYS = Always()


@dataclasses.dataclass(frozen=True)
class Eq(Predicate):
    field: str
    value: Any

    def is_satisfied_by(self, candidate: Any) -> bool:
        actual = _read(candidate, self.field)
        return actual is not None and actual == self.value


@dataclasses.dataclass(frozen=True)
class Range(Predicate):
    """Inclusive range; a missing bound leaves that side open.

    A record whose attribute is NULL never satisfies a range, even a fully
    open one, mirroring SQL comparison semantics.
    """

    field: str
    lower: Any = None
    upper: Any = None

    def is_satisfied_by(self, candidate: Any) -> bool:
        actual = _read(candidate, self.field)
        if actual is None:
            return False
        if self.lower is not None and actual < self.lower:
            return False
        if self.upper is not None and actual > self.upper:
            return False
        return True


@dataclasses.dataclass(frozen=True)
class Contains(Predicate):
    """Case-insensitive substring match; ``pattern`` is matched literally."""

    field: str
    pattern: str

    def is_satisfied_by(self, candidate: Any) -> bool:
        actual = _read(candidate, self.field)
        if actual is None:
            return False
        return self.pattern.lower() in str(actual).lower()


@dataclasses.dataclass(frozen=True)
class Or(Predicate):
    operands: tuple[Predicate, ...]

    @classmethod
    def of(cls, *operands: Predicate) -> "Or":
        flat: list[Predicate] = []
        for op in operands:
            flat.extend(op.operands if isinstance(op, Or) else (op,))
        return cls(tuple(flat))

    def is_satisfied_by(self, candidate: Any) -> bool:
        return any(op.is_satisfied_by(candidate) for op in self.operands)

    @property
    def is_tautology(self) -> bool:
        return any(op.is_tautology for op in self.operands)


@dataclasses.dataclass(frozen=True)
class And(Predicate):
    """Conjunction; an empty ``And`` is a tautology."""

    operands: tuple[Predicate, ...]

    @classmethod
    def of(cls, *operands: Predicate) -> "And":
        flat: list[Predicate] = []
        for op in operands:
            flat.extend(op.operands if isinstance(op, And) else (op,))
        return cls(tuple(flat))

    def is_satisfied_by(self, candidate: Any) -> bool:
        return all(op.is_satisfied_by(candidate) for op in self.operands)

    @property
    def is_tautology(self) -> bool:
        return all(op.is_tautology for op in self.operands)


__all__ = [
    "ALWAYS",
    "Always",
    "And",
    "Contains",
    "Eq",
    "Or",
    "Predicate",
    "Range",
]
