"""SelectionTracker: owned selection set + callback registry for changes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Sequence

from .rows import DEFAULT_ID_FIELD, Row

logger = logging.getLogger(__name__)

# Host selection actions
SELECT_ALL = "selectAllRows"
DESELECT_ALL = "deselectAllRows"
ROW_SELECT = "rowSelect"
ROW_DESELECT = "rowDeselect"
VALID_ACTIONS = frozenset({SELECT_ALL, DESELECT_ALL, ROW_SELECT, ROW_DESELECT})

# Internal actions
PRE_SELECTION = "preSelection"
RECONCILE = "reconcile"
CLEAR = "clear"


@dataclass(frozen=True)
class SelectionChange:
    """Result of one selection operation, forwarded to the host as-is."""

    action: str
    selected_ids: tuple = ()
    selected_records: tuple = ()
    deselected_records: tuple = ()
    record_id: Any = None
    added: tuple = field(default=(), compare=False)
    removed: tuple = field(default=(), compare=False)

    @property
    def total_selected(self) -> int:
        return len(self.selected_ids)

    def to_payload(self) -> dict:
        """Notification payload in the host's key convention."""
        return {
            "selectedIds": list(self.selected_ids),
            "selectedRecords": list(self.selected_records),
            "deselectedRecords": list(self.deselected_records),
            "totalSelected": self.total_selected,
            "action": self.action,
            "recordId": self.record_id,
        }


SelectionCallback = Callable[[SelectionChange], Any]


class SelectionTracker:
    """Holds the selected row ids and notifies registered callbacks.

    The selection is an insertion-ordered set of ids, independent of any
    paging, sort or filter state. All mutation goes through the methods
    below; each returns a ``SelectionChange`` and notifies callbacks.
    """

    def __init__(self, id_field: str = DEFAULT_ID_FIELD) -> None:
        self._id_field = id_field
        self._ids: dict = {}
        self._callbacks: list[SelectionCallback] = []

    @property
    def id_field(self) -> str:
        return self._id_field

    def current(self) -> tuple:
        """Selected ids in insertion order."""
        return tuple(self._ids)

    def __contains__(self, row_id: Any) -> bool:
        return row_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def on_change(self, callback: SelectionCallback) -> None:
        """Register a callback: fn(change)."""
        self._callbacks.append(callback)

    # --- Contract operations ---

    def select(
        self,
        ids: Iterable,
        dataset: Sequence[Row] = (),
        action: str = ROW_SELECT,
    ) -> SelectionChange:
        """Add ``ids``; selected records are dataset rows now selected."""
        before = set(self._ids)
        last = None
        for row_id in ids:
            self._ids[row_id] = None
            last = row_id
        added = tuple(i for i in self._ids if i not in before)
        return self._emit(
            action,
            selected_records=self._member_rows(dataset),
            record_id=last,
            added=added,
        )

    def deselect(
        self,
        row_id: Any,
        dataset: Sequence[Row] = (),
        batch: Sequence | None = None,
    ) -> SelectionChange:
        """Remove ``row_id``.

        An explicitly empty ``batch`` means the host's table reported no
        remaining selection, which clears everything like ``deselect_all``.
        """
        if batch is not None and len(batch) == 0:
            return self.deselect_all(dataset, action=ROW_DESELECT, record_id=row_id)

        removed = (row_id,) if row_id in self._ids else ()
        self._ids.pop(row_id, None)
        return self._emit(
            ROW_DESELECT,
            selected_records=self._member_rows(dataset),
            deselected_records=[
                row for row in dataset if row.get(self._id_field) not in self._ids
            ],
            record_id=row_id,
            removed=removed,
        )

    def select_all(self, dataset: Sequence[Row]) -> SelectionChange:
        """Replace the selection with every id of ``dataset``."""
        before = set(self._ids)
        self._ids = {row.get(self._id_field): None for row in dataset}
        return self._emit(
            SELECT_ALL,
            selected_records=list(dataset),
            added=tuple(i for i in self._ids if i not in before),
            removed=tuple(i for i in before if i not in self._ids),
        )

    def deselect_all(
        self,
        dataset: Sequence[Row] = (),
        action: str = DESELECT_ALL,
        record_id: Any = None,
    ) -> SelectionChange:
        """Clear the selection; previous members become deselected records."""
        previous = tuple(self._ids)
        deselected = self._resolve(previous, dataset)
        self._ids.clear()
        return self._emit(
            action,
            deselected_records=deselected,
            record_id=record_id,
            removed=previous,
        )

    def apply(
        self,
        action: str,
        dataset: Sequence[Row] = (),
        ids: Sequence | None = None,
        value: Any = None,
    ) -> SelectionChange:
        """Dispatch a host selection event.

        Unknown actions clear the selection entirely so the table never
        shows a partially-updated state.
        """
        if action == SELECT_ALL:
            return self.select_all(dataset)
        if action == DESELECT_ALL:
            return self.deselect_all(dataset)
        if action == ROW_SELECT:
            return self.select(ids or (), dataset)
        if action == ROW_DESELECT:
            return self.deselect(value, dataset, batch=ids)

        logger.warning("Unknown selection action %r; clearing selection", action)
        return self.deselect_all(dataset, action=action, record_id=value)

    def retain(
        self,
        valid_ids: Iterable,
        dataset: Sequence[Row] = (),
        action: str = RECONCILE,
    ) -> SelectionChange | None:
        """Drop ids not in ``valid_ids``.

        Returns None (and notifies nobody) when nothing was dropped.
        ``dataset`` resolves the dropped ids into deselected records.
        """
        keep = set(valid_ids)
        removed = tuple(i for i in self._ids if i not in keep)
        if not removed:
            return None
        for row_id in removed:
            del self._ids[row_id]
        return self._emit(
            action,
            deselected_records=self._resolve(removed, dataset),
            record_id=removed[-1],
            removed=removed,
        )

    # --- Internals ---

    def _member_rows(self, dataset: Sequence[Row]) -> list:
        return [row for row in dataset if row.get(self._id_field) in self._ids]

    def _resolve(self, ids: Iterable, dataset: Sequence[Row]) -> list:
        """Map ids to their first row in ``dataset``; unresolved ids are skipped."""
        by_id: dict = {}
        for row in dataset:
            by_id.setdefault(row.get(self._id_field), row)
        return [by_id[i] for i in ids if i in by_id]

    def _emit(
        self,
        action: str,
        selected_records: Iterable = (),
        deselected_records: Iterable = (),
        record_id: Any = None,
        added: tuple = (),
        removed: tuple = (),
    ) -> SelectionChange:
        change = SelectionChange(
            action=action,
            selected_ids=tuple(self._ids),
            selected_records=tuple(selected_records),
            deselected_records=tuple(deselected_records),
            record_id=record_id,
            added=added,
            removed=removed,
        )
        for cb in self._callbacks:
            cb(change)
        return change

    def __repr__(self) -> str:
        return f"SelectionTracker(selected={len(self._ids)})"
