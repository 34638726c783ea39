"""SearchEngine: free-text and multi-value list search over configured fields."""

from __future__ import annotations

import re
from typing import Any, Sequence

from ..core.rows import Row, is_null, resolve_field_value, unwrap_scalar

_COMMA_WS = re.compile(r"\s*,\s*")
_PASTE_SEPARATORS = re.compile(r"\r\n|\r|\n|,")


class SearchEngine:
    """Filters rows by a comma-delimited query.

    A row matches when any searchable field either contains the whole
    normalized query as a substring, or exactly equals one of its
    comma-separated terms. The second rule lets users paste a list of
    values (e.g. account numbers) and get every listed row back.
    Matching is case-insensitive.
    """

    @staticmethod
    def normalize(raw: str | None) -> str:
        """Collapse whitespace around commas and trim the ends."""
        if not raw:
            return ""
        return _COMMA_WS.sub(",", raw).strip()

    @staticmethod
    def terms(query: str) -> list[str]:
        """Lowercase comma-separated terms of a normalized query."""
        return SearchEngine.normalize(query).lower().split(",")

    @staticmethod
    def normalize_paste(text: str) -> str:
        """Turn line-break separated pasted text into a comma list.

        Text with a single non-blank segment is returned unchanged.
        """
        segments = [s for s in _PASTE_SEPARATORS.split(text) if s.strip()]
        if len(segments) > 1:
            return ",".join(segments)
        return text

    @staticmethod
    def filter(query: str | None, fields: Sequence[str], dataset: Sequence[Row]) -> list:
        """Return rows of ``dataset`` matching ``query`` on any of ``fields``.

        An empty query matches everything. Absent, null or empty field
        values never match.
        """
        query = SearchEngine.normalize(query)
        if not query:
            return list(dataset)
        needle = query.lower()
        terms = set(needle.split(","))

        matched = []
        for row in dataset:
            for field_path in fields:
                value = _searchable_text(resolve_field_value(row, field_path))
                if value and (needle in value or value in terms):
                    matched.append(row)
                    break
        return matched


def _searchable_text(value: Any) -> str | None:
    if is_null(value):
        return None
    value = unwrap_scalar(value)
    if isinstance(value, (dict, list, tuple, set)):
        return None
    return str(value).lower()
