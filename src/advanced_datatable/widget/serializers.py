"""Serializers: convert table objects to JSON strings for the host."""

from __future__ import annotations

import datetime as dt
import json
from typing import Any, Sequence

import numpy as np
import pandas as pd

from ..core.rows import Row
from ..core.selection import SelectionChange
from ..transform.sort import SortSpec


def _json_default(value: Any) -> Any:
    """Fallback encoder for dates, numpy scalars and sets."""
    if isinstance(value, (pd.Timestamp, dt.datetime, dt.date)):
        return value.isoformat()
    if isinstance(value, np.datetime64):
        return pd.Timestamp(value).isoformat()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return str(value)


def dumps(obj: Any) -> str:
    return json.dumps(obj, default=_json_default)


def serialize_selection_change(change: SelectionChange) -> str:
    """Serialize a selection change as the host notification payload."""
    return dumps(change.to_payload())


def serialize_window(rows: Sequence[Row], has_more: bool) -> str:
    """Serialize a visible window as {rows, size, hasMore}."""
    return dumps({
        "rows": [dict(row) for row in rows],
        "size": len(rows),
        "hasMore": has_more,
    })


def serialize_sort_indicator(spec: SortSpec | None) -> str:
    """Serialize the current sort indicator; null fields when unsorted."""
    if spec is None:
        return dumps({"sortedBy": None, "sortedDirection": None})
    return dumps(spec.to_dict())
