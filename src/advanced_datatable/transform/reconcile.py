"""Reconciler: keep a selection consistent with the rows that exist."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..core.rows import DEFAULT_ID_FIELD, Row


class Reconciler:
    """Prunes selected ids against a dataset and builds the selected-rows view.

    Both operations are pure; applying the pruned ids back onto a
    ``SelectionTracker`` is the caller's job (``SelectionTracker.retain``).
    """

    @staticmethod
    def reconcile(
        dataset: Sequence[Row],
        selection: Iterable,
        id_field: str = DEFAULT_ID_FIELD,
    ) -> list:
        """Return the ids of ``selection`` present in ``dataset``.

        Selection order is kept. Idempotent: reconciling an already
        pruned selection against the same dataset returns it unchanged.
        """
        present = {row.get(id_field) for row in dataset}
        return [row_id for row_id in selection if row_id in present]

    @staticmethod
    def selected_rows(
        dataset: Sequence[Row],
        selection: Iterable,
        id_field: str = DEFAULT_ID_FIELD,
    ) -> list:
        """Map selected ids to rows, in selection order.

        Unresolved ids are skipped and every id yields at most one row
        (the first row carrying it in ``dataset``).
        """
        by_id: dict = {}
        for row in dataset:
            by_id.setdefault(row.get(id_field), row)

        seen: set = set()
        rows = []
        for row_id in selection:
            row = by_id.get(row_id)
            if row is None or row_id in seen:
                continue
            seen.add(row_id)
            rows.append(row)
        return rows
