"""Typed predicates over record fields, compiled to Qdrant filters.

Predicates are built from validated field identifiers and typed values,
never from interpolated strings, so a path containing quotes or operators
is always compared as a literal value.
"""

from __future__ import annotations

import dataclasses
from typing import Tuple, Union

from qdrant_client.models import FieldCondition, Filter, MatchValue

from ..core.models import DatabaseFields
from ..exceptions import FilterError

FilterValue = Union[str, int]

FILTERABLE_FIELDS = {
    DatabaseFields.NOTE_PATH: str,
    DatabaseFields.CONTENT: str,
    DatabaseFields.SUB_NOTE_INDEX: int,
}


@dataclasses.dataclass(frozen=True)
class Condition:
    field: str
    value: FilterValue
    negate: bool = False

    def __post_init__(self) -> None:
        expected = FILTERABLE_FIELDS.get(self.field)
        if expected is None:
            raise FilterError(f"Field {self.field!r} cannot be used in a filter")
        if isinstance(self.value, bool) or not isinstance(self.value, expected):
            raise FilterError(
                f"Field {self.field!r} expects {expected.__name__}, got {type(self.value).__name__}"
            )

    def __str__(self) -> str:
        op = "!=" if self.negate else "="
        return f"{self.field} {op} {self.value!r}"


@dataclasses.dataclass(frozen=True)
class Predicate:
    """Conjunction of field conditions."""

    conditions: Tuple[Condition, ...]

    def __and__(self, other: "Predicate") -> "Predicate":
        return Predicate(self.conditions + other.conditions)

    def __str__(self) -> str:
        return " AND ".join(str(c) for c in self.conditions) or "TRUE"

    def to_qdrant(self) -> Filter:
        must = [
            FieldCondition(key=c.field, match=MatchValue(value=c.value))
            for c in self.conditions
            if not c.negate
        ]
        must_not = [
            FieldCondition(key=c.field, match=MatchValue(value=c.value))
            for c in self.conditions
            if c.negate
        ]
        return Filter(must=must or None, must_not=must_not or None)


def field_eq(field: str, value: FilterValue) -> Predicate:
    return Predicate((Condition(field, value),))


def field_ne(field: str, value: FilterValue) -> Predicate:
    return Predicate((Condition(field, value, negate=True),))


def all_of(*predicates: Predicate) -> Predicate:
    conditions: Tuple[Condition, ...] = ()
    for p in predicates:
        conditions += p.conditions
    return Predicate(conditions)


def path_equals(note_path: str) -> Predicate:
    return field_eq(DatabaseFields.NOTE_PATH, note_path)


def content_empty() -> Predicate:
    return field_eq(DatabaseFields.CONTENT, "")


def content_not_empty() -> Predicate:
    return field_ne(DatabaseFields.CONTENT, "")
