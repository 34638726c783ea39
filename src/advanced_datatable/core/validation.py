"""Input validation with clear error messages for host integrators."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pandas as pd

from .errors import RowValidationError
from .rows import rows_from_dataframe


def validate_rows(data: Any, id_field: str) -> list[dict]:
    """Validate host rows and return them as a list of dicts.

    Accepts a DataFrame or any iterable of mappings. Every row must carry a
    non-null ``id_field``. Duplicate ids are allowed (the selected-rows view
    collapses them).
    """
    if data is None:
        return []
    if isinstance(data, pd.DataFrame):
        data = rows_from_dataframe(data, id_field)
    if isinstance(data, (str, bytes)) or isinstance(data, Mapping):
        raise RowValidationError(
            f"Expected a sequence of rows, got {type(data).__name__}. "
            "Wrap a single row in a list."
        )
    try:
        rows = list(data)
    except TypeError:
        raise RowValidationError(
            f"Expected a sequence of rows, got {type(data).__name__}."
        ) from None

    bad_types = [i for i, row in enumerate(rows) if not isinstance(row, Mapping)]
    if bad_types:
        raise RowValidationError(
            f"Rows must be mappings. Non-mapping rows at positions: {bad_types[:5]}"
            + (f" (and {len(bad_types) - 5} more)" if len(bad_types) > 5 else "")
        )
    missing = [i for i, row in enumerate(rows) if row.get(id_field) is None]
    if missing:
        raise RowValidationError(
            f"Rows are missing the id field '{id_field}' at positions: {missing[:5]}"
            + (f" (and {len(missing) - 5} more)" if len(missing) > 5 else "")
        )
    return [dict(row) for row in rows]


def validate_page_size(page_size: Any) -> int:
    if isinstance(page_size, bool) or not isinstance(page_size, int):
        raise ValueError(f"page_size must be an integer, got {page_size!r}.")
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}.")
    return page_size


def validate_fields(fields: Any, what: str = "searchable fields") -> tuple[str, ...]:
    """Validate an ordered list of field names."""
    if fields is None:
        return ()
    if isinstance(fields, str):
        fields = [fields]
    fields = list(fields)
    bad = [f for f in fields if not isinstance(f, str) or not f]
    if bad:
        raise ValueError(f"{what} must be non-empty strings, got: {bad[:5]}")
    return tuple(fields)
