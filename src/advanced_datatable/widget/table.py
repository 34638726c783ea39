"""DataTable: headless controller wiring rows, selection, sort and search."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Sequence

import pandas as pd

from ..config import ColumnSpec, TableConfig
from ..core.errors import (
    DataTableError,
    LoadMoreError,
    OperationResult,
    PasteError,
    SelectionActionError,
    SortError,
)
from ..core.row_store import DEFAULT_PAGE_SIZE, RowStore
from ..core.rows import DEFAULT_ID_FIELD, rows_to_dataframe
from ..core.selection import (
    CLEAR,
    PRE_SELECTION,
    VALID_ACTIONS,
    SelectionCallback,
    SelectionChange,
    SelectionTracker,
)
from ..core.validation import validate_rows
from ..transform.reconcile import Reconciler
from ..transform.search import SearchEngine
from ..transform.sort import ASCENDING, SortEngine, SortSpec
from .search_box import SearchBox
from .state import TableState

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[OperationResult], Any]


class DataTable:
    """Data table with lazy loading, sorting, selection and list search.

    Usage::

        table = DataTable(
            rows,
            columns=[{"label": "Name", "fieldName": "Name"}],
            searchable_fields=["Name", "AccountNumber"],
        )
        table.on_selection_change(lambda change: notify(change.to_payload()))
        table.pre_select(["001A", "001B"])
        table.sort("Name", "asc")
        table.paste("001A\\n001C")      # searches for both numbers
        table.load_more()

    The selection lives in a ``SelectionTracker`` and is independent of the
    visible window, sort and search. After every operation it is
    reconciled against the loaded rows, and a snapshot is pushed to
    ``table.state`` for rendering. Operations never raise for
    recoverable failures: they keep the last good state and return a
    failed ``OperationResult``.
    """

    ENTER_KEY_CODE = 13

    def __init__(
        self,
        rows: Iterable[Mapping] | pd.DataFrame | None = None,
        *,
        config: TableConfig | None = None,
        columns: Sequence[ColumnSpec | Mapping] | None = None,
        searchable_fields: Sequence[str] | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        id_field: str = DEFAULT_ID_FIELD,
    ) -> None:
        if config is None:
            config = TableConfig(
                page_size=page_size,
                id_field=id_field,
                searchable_fields=tuple(searchable_fields or ()),
                columns=tuple(columns or ()),
            )
        self._config = config
        id_field = config.id_field

        # Source rows as supplied by the host; empty until data arrives
        self._source: tuple = ()
        self._has_data = False

        # Main window and the independent selected-rows window
        self._store = RowStore.from_rows((), config.page_size, id_field)
        self._selected_store = RowStore.from_rows((), config.page_size, id_field)
        self._sort: SortSpec | None = None
        self._selected_sort: SortSpec | None = None

        # Selection + search
        self._tracker = SelectionTracker(id_field)
        self._search_box = SearchBox()
        self._query = ""

        # Recovered failures
        self._last_error: DataTableError | None = None
        self._error_callbacks: list[ErrorCallback] = []

        self.state = TableState()

        if rows is not None:
            self.set_data(rows)

    # --- Accessors ---

    @property
    def config(self) -> TableConfig:
        return self._config

    @property
    def source(self) -> list:
        return list(self._source)

    @property
    def dataset(self) -> list:
        """The working rows (post-search, post-sort)."""
        return list(self._store.rows)

    @property
    def visible_rows(self) -> list:
        return self._store.visible

    @property
    def has_more(self) -> bool:
        return self._store.has_more

    @property
    def selected_ids(self) -> list:
        return list(self._tracker.current())

    @property
    def selected_rows(self) -> list:
        """Visible prefix of the read-only selected-rows view."""
        return self._selected_store.visible

    @property
    def all_selected_rows(self) -> list:
        return list(self._selected_store.rows)

    @property
    def sort_indicator(self) -> SortSpec | None:
        return self._sort

    @property
    def selected_sort_indicator(self) -> SortSpec | None:
        return self._selected_sort

    @property
    def search_value(self) -> str:
        return self._search_box.value

    @property
    def last_error(self) -> DataTableError | None:
        return self._last_error

    def to_frame(self) -> pd.DataFrame:
        """Working dataset as a DataFrame indexed by the id field."""
        return rows_to_dataframe(self._store.rows, self._config.id_field)

    def selected_frame(self) -> pd.DataFrame:
        return rows_to_dataframe(self._selected_store.rows, self._config.id_field)

    # --- Observers ---

    def on_selection_change(self, callback: SelectionCallback) -> None:
        """Register a callback: fn(SelectionChange)."""
        self._tracker.on_change(callback)

    def on_error(self, callback: ErrorCallback) -> None:
        """Register a callback: fn(OperationResult) for recovered failures."""
        self._error_callbacks.append(callback)

    # --- Data ---

    def set_data(self, rows: Iterable[Mapping] | pd.DataFrame | None) -> None:
        """Replace the source rows.

        The active search and sort are re-applied, the window resets to
        one page, and selected ids missing from the new rows are pruned
        (emitting a ``reconcile`` change). ``None`` means no data yet:
        pre-selected ids are kept until real rows arrive. If a stored sort
        can no longer be applied to the new rows, the rows are shown
        unsorted and the failure is reported to ``on_error``.
        """
        if rows is None:
            self._source = ()
            self._has_data = False
            self._store = self._store.replace(())
            self._refresh_selected_view()
            self._push_state()
            return

        validated = validate_rows(rows, self._config.id_field)
        previous = self._source
        self._source = tuple(validated)
        self._has_data = True
        dataset, sort_error = self._derive_dataset()
        self._store = self._store.replace(dataset)
        logger.debug("Loaded %d rows (%d after search)", len(self._source), self._store.size)

        self._reconcile(previous)
        selected_sort_error = self._refresh_selected_view()
        self._push_state()
        if sort_error is not None:
            self._fail("sort", sort_error)
        if selected_sort_error is not None:
            self._fail("sort_selected", selected_sort_error)

    def pre_select(self, ids: Iterable | None) -> SelectionChange | None:
        """Mark ``ids`` as selected, e.g. selections restored by the host."""
        if ids is None:
            return None
        change = self._tracker.select(list(ids), self._source, action=PRE_SELECTION)
        self._reconcile(self._source)
        selected_sort_error = self._refresh_selected_view()
        self._push_state()
        if selected_sort_error is not None:
            self._fail("sort_selected", selected_sort_error)
        return change

    def clear_selection(self) -> SelectionChange:
        """Explicit external clear of the whole selection."""
        change = self._tracker.deselect_all(self._source, action=CLEAR)
        self._refresh_selected_view()
        self._push_state()
        return change

    # --- Selection events ---

    def handle_row_selection(
        self,
        action: str | None,
        selected_ids: Sequence | None = None,
        value: Any = None,
    ) -> OperationResult:
        """Apply a host selection event.

        ``selected_ids`` may hold ids or row mappings (the host table
        reports its selected rows). Events without an action are ignored.
        """
        if not action:
            return OperationResult.success("selection")

        ids = None
        if selected_ids is not None:
            ids = [
                item.get(self._config.id_field) if isinstance(item, Mapping) else item
                for item in selected_ids
            ]

        error = None
        if action not in VALID_ACTIONS:
            error = SelectionActionError(
                f"Unknown selection action {action!r}; selection cleared."
            )
        self._tracker.apply(action, self._source, ids=ids, value=value)
        self._reconcile(self._source)
        selected_sort_error = self._refresh_selected_view()
        if error is not None:
            return self._fail("selection", error)
        if selected_sort_error is not None:
            return self._fail("sort_selected", selected_sort_error)
        self._push_state()
        return OperationResult.success("selection")

    # --- Lazy loading ---

    def load_more(self) -> OperationResult:
        """Append the next page of the dataset to the visible window."""
        if not self._store.has_more:
            return OperationResult.success("load_more")
        self.state.is_loading = True
        try:
            self._store = self._store.load_more()
        except (ValueError, IndexError) as exc:
            logger.exception("Load more failed; keeping %d visible rows", self._store.window)
            return self._fail("load_more", LoadMoreError(str(exc)))
        self._reconcile(self._source)
        self._push_state()
        return OperationResult.success("load_more")

    def load_more_selected(self) -> OperationResult:
        """Append the next page of the selected-rows view."""
        if not self._selected_store.has_more:
            return OperationResult.success("load_more_selected")
        self.state.is_readonly_loading = True
        try:
            self._selected_store = self._selected_store.load_more()
        except (ValueError, IndexError) as exc:
            logger.exception(
                "Load more failed for selected rows; keeping %d visible rows",
                self._selected_store.window,
            )
            return self._fail("load_more_selected", LoadMoreError(str(exc)))
        self._push_state()
        return OperationResult.success("load_more_selected")

    # --- Sorting ---

    def sort(self, field_path: str, direction: str = ASCENDING) -> OperationResult:
        """Sort the working dataset; the window resets to one page."""
        try:
            spec = self._checked_spec(SortSpec, field_path, direction)
        except SortError as exc:
            logger.warning("Rejected sort request: %s", exc)
            return self._fail("sort", exc)
        return self._apply_sort(spec)

    def handle_sort_event(self, event: Mapping[str, Any]) -> OperationResult:
        """Sort from a host event ``{"fieldName": ..., "sortDirection": ...}``."""
        try:
            spec = self._checked_spec(SortSpec.from_event, event)
        except SortError as exc:
            logger.warning("Rejected sort event %r: %s", event, exc)
            return self._fail("sort", exc)
        return self._apply_sort(spec)

    def sort_selected(self, field_path: str, direction: str = ASCENDING) -> OperationResult:
        """Sort the selected-rows view independently of the main table."""
        try:
            spec = self._checked_spec(SortSpec, field_path, direction)
        except SortError as exc:
            logger.warning("Rejected sort request for selected rows: %s", exc)
            return self._fail("sort_selected", exc)
        outcome = SortEngine.sort_checked(self._selected_store.rows, spec)
        if not outcome.ok:
            return self._fail("sort_selected", outcome.error)
        self._selected_sort = spec
        self._selected_store = self._selected_store.replace(outcome.rows)
        self._push_state()
        return OperationResult.success("sort_selected")

    def _checked_spec(self, factory: Callable[..., SortSpec], *args: Any) -> SortSpec:
        spec = factory(*args)
        if not self._config.is_sortable(spec.field_path):
            raise SortError(f"Column '{spec.field_path}' is not sortable.")
        return spec

    def _apply_sort(self, spec: SortSpec) -> OperationResult:
        outcome = SortEngine.sort_checked(self._store.rows, spec)
        if not outcome.ok:
            return self._fail("sort", outcome.error)
        self._sort = spec
        self._store = self._store.replace(outcome.rows)
        self._reconcile(self._source)
        self._push_state()
        return OperationResult.success("sort")

    # --- Searching ---

    def set_search_value(self, raw: str | None) -> None:
        """Track typed text without searching."""
        self._search_box.set_value(raw)
        self.state.search_value = self._search_box.value

    def handle_search_key(self, key_code: int | None, raw: str | None) -> OperationResult:
        """Enter submits the search; any other key just updates the text."""
        if key_code == self.ENTER_KEY_CODE:
            return self.submit_search(raw)
        self.set_search_value(raw)
        return OperationResult.success("search_key")

    def submit_search(self, raw: str | None = None) -> OperationResult:
        """Filter the source rows by the search box value.

        An empty value restores all rows. The active sort is re-applied and
        the window resets to one page. If the sort fails on the matched
        rows they are shown unsorted and a failed result is returned.
        """
        if raw is not None:
            self._search_box.set_value(raw)
        self._query = SearchEngine.normalize(self._search_box.value)
        dataset, sort_error = self._derive_dataset()
        self._store = self._store.replace(dataset)
        self._reconcile(self._source)
        if sort_error is not None:
            return self._fail("sort", sort_error)
        self._push_state()
        return OperationResult.success("search")

    def paste(
        self,
        text: str,
        selection_start: int | None = None,
        selection_end: int | None = None,
    ) -> OperationResult:
        """Paste into the search box and search immediately.

        Line-break separated text becomes a comma list first. On failure
        the search box is left unchanged and no search runs.
        """
        try:
            self._search_box.paste(text, selection_start, selection_end)
        except PasteError as exc:
            logger.warning("Paste rejected: %s", exc)
            return self._fail("paste", exc)
        return self.submit_search()

    # --- Internals ---

    def _derive_dataset(self) -> tuple[list, SortError | None]:
        """Search then sort the source rows.

        A failed sort is dropped; the unsorted rows come back with its error.
        """
        rows = list(self._source)
        if self._query:
            rows = SearchEngine.filter(
                self._query, self._config.effective_searchable_fields, rows
            )
        error = None
        if self._sort is not None:
            outcome = SortEngine.sort_checked(rows, self._sort)
            if not outcome.ok:
                self._sort = None
                error = outcome.error
            rows = outcome.rows
        return rows, error

    def _reconcile(self, previous_source: Sequence[Mapping]) -> SelectionChange | None:
        """Prune selected ids that are no longer in the source rows.

        Pruned ids are resolved to records against ``previous_source``,
        where they were last seen.
        """
        if not self._has_data:
            return None
        id_field = self._config.id_field
        kept = Reconciler.reconcile(self._source, self._tracker.current(), id_field)
        change = self._tracker.retain(kept, dataset=previous_source)
        if change is not None:
            logger.info("Pruned %d stale selected ids", len(change.removed))
        return change

    def _refresh_selected_view(self) -> SortError | None:
        rows = Reconciler.selected_rows(
            self._source, self._tracker.current(), self._config.id_field
        )
        error = None
        if self._selected_sort is not None:
            outcome = SortEngine.sort_checked(rows, self._selected_sort)
            if not outcome.ok:
                self._selected_sort = None
                error = outcome.error
            rows = outcome.rows
        self._selected_store = self._selected_store.replace(rows)
        return error

    def _fail(self, operation: str, error: DataTableError) -> OperationResult:
        self._last_error = error
        result = OperationResult.failure(operation, error)
        self._push_state(status_text=str(error))
        for cb in self._error_callbacks:
            cb(result)
        return result

    def _push_state(self, status_text: str = "") -> None:
        sort, selected_sort = self._sort, self._selected_sort
        selected_ids = list(self._tracker.current())
        self.state.param.update(
            visible_rows=self._store.visible,
            dataset_size=self._store.size,
            has_more=self._store.has_more,
            is_loading=False,
            sorted_by=sort.field_path if sort else None,
            sorted_direction=sort.direction if sort else None,
            search_value=self._search_box.value,
            selected_ids=selected_ids,
            total_selected=len(selected_ids),
            selected_rows=self._selected_store.visible,
            selected_size=self._selected_store.size,
            has_more_selected=self._selected_store.has_more,
            is_readonly_loading=False,
            selected_sorted_by=selected_sort.field_path if selected_sort else None,
            selected_sorted_direction=selected_sort.direction if selected_sort else None,
            status_text=status_text,
        )

    def __repr__(self) -> str:
        return (
            f"DataTable(rows={len(self._source)}, visible={self._store.window}, "
            f"selected={len(self._tracker)})"
        )
