"""SortEngine: stable, type-aware row sorting by a (dotted) field path."""

from __future__ import annotations

import copy
import datetime as dt
import functools
import json
import locale
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import numpy as np
import pandas as pd

from ..core.errors import SortError
from ..core.rows import Row, is_null, resolve_field_value, unwrap_scalar

logger = logging.getLogger(__name__)

ASCENDING = "asc"
DESCENDING = "desc"
VALID_DIRECTIONS = (ASCENDING, DESCENDING)


@dataclass(frozen=True)
class SortSpec:
    """Requested ordering: field path + direction ("asc" or "desc")."""

    field_path: str
    direction: str = ASCENDING

    def __post_init__(self) -> None:
        if not isinstance(self.field_path, str) or not self.field_path:
            raise SortError(f"Sort field must be a non-empty string, got {self.field_path!r}.")
        if self.direction not in VALID_DIRECTIONS:
            raise SortError(
                f"Unknown sort direction {self.direction!r}. Use 'asc' or 'desc'."
            )

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> SortSpec:
        """Build a spec from a host sort event ({fieldName, sortDirection})."""
        if not isinstance(event, Mapping):
            raise SortError(f"Sort event must be a mapping, got {type(event).__name__}.")
        field_path = event.get("fieldName", event.get("field_path"))
        direction = event.get("sortDirection", event.get("direction", ASCENDING))
        return cls(field_path=field_path, direction=direction)

    @property
    def ascending(self) -> bool:
        return self.direction == ASCENDING

    def flipped(self) -> SortSpec:
        return SortSpec(
            self.field_path, DESCENDING if self.ascending else ASCENDING
        )

    def to_dict(self) -> dict:
        return {"sortedBy": self.field_path, "sortedDirection": self.direction}


@dataclass(frozen=True)
class SortOutcome:
    """Sorted rows, or the untouched input plus the error that stopped the sort."""

    rows: list
    error: SortError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


# --- Value classification ---

_NUMBER = "number"
_BOOLEAN = "boolean"
_TEXT = "text"
_DATE = "date"
_OBJECT = "object"


def _kind(value: Any) -> str:
    if isinstance(value, (bool, np.bool_)):
        return _BOOLEAN
    if isinstance(value, (int, float, np.number)):
        return _NUMBER
    if isinstance(value, str):
        return _TEXT
    if isinstance(value, (dt.date, np.datetime64)):
        return _DATE
    return _OBJECT


def _text(value: Any) -> str:
    return str(value).casefold()


def _canonical(value: Any) -> str:
    return json.dumps(value, sort_keys=True, default=str).casefold()


def _collate(a: str, b: str) -> int:
    return locale.strcoll(a, b)


def compare_values(a: Any, b: Any, ascending: bool = True) -> int:
    """Three-way comparison of two resolved field values.

    Nulls always sort last; the direction only flips non-null comparisons.
    """
    a_null, b_null = is_null(a), is_null(b)
    if a_null and b_null:
        return 0
    if a_null:
        return 1
    if b_null:
        return -1

    a, b = unwrap_scalar(a), unwrap_scalar(b)
    kind_a, kind_b = _kind(a), _kind(b)
    if kind_a != kind_b:
        result = _collate(_text(a), _text(b))
    elif kind_a == _NUMBER:
        diff = a - b
        result = (diff > 0) - (diff < 0)
    elif kind_a == _BOOLEAN:
        result = int(bool(a)) - int(bool(b))
    elif kind_a == _TEXT:
        result = _collate(a.casefold(), b.casefold())
    elif kind_a == _DATE:
        ta, tb = pd.Timestamp(a), pd.Timestamp(b)
        result = (ta > tb) - (ta < tb)
    else:
        result = _collate(_canonical(a), _canonical(b))

    return result if ascending else -result


class SortEngine:
    """Produce a sorted deep copy of a row collection.

    Sorting is stable: rows comparing equal keep their relative order.
    Input rows are never reordered or mutated.
    """

    @staticmethod
    def sort_checked(dataset: Sequence[Row], spec: SortSpec) -> SortOutcome:
        """Sort ``dataset`` by ``spec``, reporting failure instead of raising."""
        try:
            cloned = copy.deepcopy(list(dataset))

            def _cmp(row_a: Row, row_b: Row) -> int:
                return compare_values(
                    resolve_field_value(row_a, spec.field_path),
                    resolve_field_value(row_b, spec.field_path),
                    spec.ascending,
                )

            return SortOutcome(rows=sorted(cloned, key=functools.cmp_to_key(_cmp)))
        except Exception as exc:  # comparator failures must not escape
            error = exc if isinstance(exc, SortError) else SortError(
                f"Could not sort by '{spec.field_path}': {exc}"
            )
            logger.warning("Sort by %r failed; keeping original order: %s", spec.field_path, exc)
            return SortOutcome(rows=list(dataset), error=error)

    @staticmethod
    def sort(dataset: Sequence[Row], spec: SortSpec) -> list:
        """Return a sorted copy of ``dataset``, or the original rows on failure."""
        return SortEngine.sort_checked(dataset, spec).rows
