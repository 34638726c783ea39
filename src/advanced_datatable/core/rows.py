"""Row helpers: field resolution, null detection and DataFrame conversion."""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

import numpy as np
import pandas as pd

Row = Mapping[str, Any]

DEFAULT_ID_FIELD = "Id"


def is_null(value: Any) -> bool:
    """True for None, NaN, pd.NA and pd.NaT. Containers are never null."""
    if value is None:
        return True
    if isinstance(value, (list, tuple, dict, set, np.ndarray)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def unwrap_scalar(value: Any) -> Any:
    """Convert numpy scalars to their Python equivalents."""
    if isinstance(value, np.datetime64):
        return pd.Timestamp(value)
    if isinstance(value, np.generic):
        return value.item()
    return value


def resolve_field_value(record: Row | None, field_path: str | None) -> Any:
    """Resolve a (possibly dotted) field path against a row.

    ``"Owner.Name"`` walks into nested mappings. Any missing segment, or a
    segment applied to a non-mapping, resolves to None.
    """
    if not record or not field_path:
        return None
    value: Any = record
    for key in field_path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
        if value is None:
            return None
    return value


def rows_from_dataframe(df: pd.DataFrame, id_field: str = DEFAULT_ID_FIELD) -> list[dict]:
    """Convert a DataFrame into row dicts.

    If ``id_field`` is not a column, the index is used as the identifier.
    Missing values become None.
    """
    frame = df
    if id_field not in frame.columns:
        frame = frame.rename_axis(id_field).reset_index()
    records = frame.to_dict(orient="records")
    rows = []
    for record in records:
        row = {}
        for key, value in record.items():
            value = unwrap_scalar(value)
            if isinstance(value, float) and math.isnan(value):
                value = None
            elif value is pd.NaT or value is pd.NA:
                value = None
            row[str(key)] = value
        rows.append(row)
    return rows


def rows_to_dataframe(rows: Iterable[Row], id_field: str = DEFAULT_ID_FIELD) -> pd.DataFrame:
    """Build a DataFrame indexed by ``id_field`` from row mappings."""
    rows = list(rows)
    if not rows:
        return pd.DataFrame(index=pd.Index([], name=id_field))
    return pd.DataFrame(rows).set_index(id_field)
