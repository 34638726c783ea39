"""RowStore: a dataset plus its lazily-growing visible window.

Immutable: each transform returns a new RowStore.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from .rows import DEFAULT_ID_FIELD, Row
from .validation import validate_page_size

DEFAULT_PAGE_SIZE = 15


@dataclass(frozen=True)
class RowStore:
    """Ordered dataset with a visible prefix of ``window`` rows.

    The visible window is always ``rows[:window]``; it starts at one page
    and grows by ``page_size`` on every ``load_more`` until it covers the
    whole dataset. Replacing the rows resets the window.
    """

    rows: tuple = ()
    window: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    id_field: str = DEFAULT_ID_FIELD
    _index: dict = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        validate_page_size(self.page_size)
        if not 0 <= self.window <= len(self.rows):
            raise ValueError(
                f"window must lie in [0, {len(self.rows)}], got {self.window}."
            )
        # First row wins per id.
        index: dict = {}
        for row in self.rows:
            index.setdefault(row.get(self.id_field), row)
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Row] = (),
        page_size: int = DEFAULT_PAGE_SIZE,
        id_field: str = DEFAULT_ID_FIELD,
    ) -> RowStore:
        """Create a store showing the first page of ``rows``."""
        rows = tuple(rows)
        validate_page_size(page_size)
        return cls(
            rows=rows,
            window=min(page_size, len(rows)),
            page_size=page_size,
            id_field=id_field,
        )

    @property
    def size(self) -> int:
        return len(self.rows)

    @property
    def visible(self) -> list:
        """The rendered prefix of the dataset."""
        return list(self.rows[: self.window])

    @property
    def has_more(self) -> bool:
        return self.window < self.size

    @property
    def ids(self) -> list:
        return [row.get(self.id_field) for row in self.rows]

    @property
    def id_set(self) -> set:
        return set(self._index)

    def row_for(self, row_id: Any) -> Row | None:
        """Return the first row with ``row_id``, or None."""
        return self._index.get(row_id)

    def load_more(self) -> RowStore:
        """Return a new store with one more page visible."""
        return RowStore(
            rows=self.rows,
            window=min(self.window + self.page_size, self.size),
            page_size=self.page_size,
            id_field=self.id_field,
        )

    def replace(self, rows: Iterable[Row]) -> RowStore:
        """Return a new store over ``rows`` with the window reset."""
        return RowStore.from_rows(rows, page_size=self.page_size, id_field=self.id_field)

    def __len__(self) -> int:
        return self.size
