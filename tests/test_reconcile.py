"""Tests for Reconciler: pruning and the de-duplicated selected-rows view."""

from advanced_datatable.transform.reconcile import Reconciler


def _ids(rows):
    return [r["Id"] for r in rows]


class TestReconcile:
    def test_subset_of_dataset_ids(self, twenty_rows):
        result = Reconciler.reconcile(twenty_rows, ["R3", "X1", "R7", "X2"])
        assert result == ["R3", "R7"]
        assert set(result) <= set(_ids(twenty_rows))

    def test_idempotent(self, twenty_rows):
        once = Reconciler.reconcile(twenty_rows, ["R9", "gone", "R1"])
        assert Reconciler.reconcile(twenty_rows, once) == once

    def test_replacement_drops_everything(self, ten_new_rows):
        assert Reconciler.reconcile(ten_new_rows, ["R3", "R7"]) == []

    def test_empty_dataset(self):
        assert Reconciler.reconcile([], ["a"]) == []

    def test_custom_id_field(self):
        rows = [{"key": 1}, {"key": 2}]
        assert Reconciler.reconcile(rows, [2, 3], id_field="key") == [2]


class TestSelectedRows:
    def test_selection_order(self, twenty_rows):
        rows = Reconciler.selected_rows(twenty_rows, ["R5", "R2"])
        assert _ids(rows) == ["R5", "R2"]

    def test_unresolved_skipped(self, twenty_rows):
        rows = Reconciler.selected_rows(twenty_rows, ["R5", "missing"])
        assert _ids(rows) == ["R5"]

    def test_duplicates_collapse(self):
        dataset = [
            {"Id": "a", "v": 1},
            {"Id": "b", "v": 2},
            {"Id": "a", "v": 3},
        ]
        rows = Reconciler.selected_rows(dataset, ["a", "b", "a"])
        assert rows == [{"Id": "a", "v": 1}, {"Id": "b", "v": 2}]
