"""Tests for SelectionTracker and SelectionChange payloads."""

import pytest

from advanced_datatable.core.selection import (
    DESELECT_ALL,
    RECONCILE,
    ROW_DESELECT,
    ROW_SELECT,
    SELECT_ALL,
    SelectionChange,
    SelectionTracker,
)


def _ids(rows):
    return [r["Id"] for r in rows]


@pytest.fixture
def rows():
    return [{"Id": f"r{i}", "Name": f"row {i}"} for i in range(1, 6)]


class TestSelect:
    def test_select_adds_ids(self, rows):
        tracker = SelectionTracker()
        change = tracker.select(["r2", "r4"], rows)
        assert tracker.current() == ("r2", "r4")
        assert change.action == ROW_SELECT
        assert _ids(change.selected_records) == ["r2", "r4"]
        assert change.record_id == "r4"

    def test_selected_records_include_earlier_members(self, rows):
        tracker = SelectionTracker()
        tracker.select(["r1"], rows)
        change = tracker.select(["r3"], rows)
        assert _ids(change.selected_records) == ["r1", "r3"]
        assert change.added == ("r3",)

    def test_select_is_idempotent(self, rows):
        tracker = SelectionTracker()
        tracker.select(["r1", "r1"], rows)
        tracker.select(["r1"], rows)
        assert tracker.current() == ("r1",)

    def test_iteration_order_is_insertion_order(self, rows):
        tracker = SelectionTracker()
        tracker.select(["r5", "r1", "r3"], rows)
        assert tracker.current() == ("r5", "r1", "r3")


class TestDeselect:
    def test_deselect_single(self, rows):
        tracker = SelectionTracker()
        tracker.select(["r1", "r2"], rows)
        change = tracker.deselect("r1", rows, batch=["r2"])
        assert tracker.current() == ("r2",)
        assert _ids(change.selected_records) == ["r2"]
        assert _ids(change.deselected_records) == ["r1", "r3", "r4", "r5"]
        assert change.record_id == "r1"
        assert change.removed == ("r1",)

    def test_deselect_without_batch(self, rows):
        tracker = SelectionTracker()
        tracker.select(["r1", "r2"], rows)
        tracker.deselect("r2", rows)
        assert tracker.current() == ("r1",)

    def test_deselect_with_empty_batch_clears_all(self, rows):
        tracker = SelectionTracker()
        tracker.select(["r1", "r2", "r3"], rows)
        change = tracker.deselect("r2", rows, batch=[])
        assert tracker.current() == ()
        assert change.action == ROW_DESELECT
        assert _ids(change.deselected_records) == ["r1", "r2", "r3"]
        assert change.selected_records == ()

    def test_deselect_unknown_id_is_harmless(self, rows):
        tracker = SelectionTracker()
        tracker.select(["r1"], rows)
        change = tracker.deselect("zzz", rows)
        assert tracker.current() == ("r1",)
        assert change.removed == ()


class TestSelectAll:
    def test_select_all_replaces(self, rows):
        tracker = SelectionTracker()
        tracker.select(["other"], [])
        change = tracker.select_all(rows)
        assert tracker.current() == tuple(_ids(rows))
        assert list(change.selected_records) == rows
        assert change.removed == ("other",)

    def test_deselect_all(self, rows):
        tracker = SelectionTracker()
        tracker.select(["r2", "r4", "ghost"], rows)
        change = tracker.deselect_all(rows)
        assert tracker.current() == ()
        assert change.action == DESELECT_ALL
        assert _ids(change.deselected_records) == ["r2", "r4"]
        assert change.total_selected == 0


class TestApply:
    def test_dispatch_select_all(self, rows):
        tracker = SelectionTracker()
        change = tracker.apply(SELECT_ALL, rows)
        assert change.total_selected == 5

    def test_dispatch_row_select(self, rows):
        tracker = SelectionTracker()
        tracker.apply(ROW_SELECT, rows, ids=["r3"])
        assert tracker.current() == ("r3",)

    def test_dispatch_row_deselect(self, rows):
        tracker = SelectionTracker()
        tracker.apply(ROW_SELECT, rows, ids=["r3", "r4"])
        tracker.apply(ROW_DESELECT, rows, ids=["r4"], value="r3")
        assert tracker.current() == ("r4",)

    def test_unknown_action_clears(self, rows):
        tracker = SelectionTracker()
        tracker.select(["r1", "r2"], rows)
        change = tracker.apply("explode", rows, value="r1")
        assert tracker.current() == ()
        assert change.action == "explode"
        assert _ids(change.deselected_records) == ["r1", "r2"]


class TestRetain:
    def test_retain_drops_missing(self, rows):
        tracker = SelectionTracker()
        tracker.select(["r1", "gone", "r3"], rows)
        change = tracker.retain({"r1", "r3"}, rows)
        assert tracker.current() == ("r1", "r3")
        assert change.action == RECONCILE
        assert change.removed == ("gone",)
        assert change.deselected_records == ()

    def test_retain_noop_returns_none(self, rows):
        tracker = SelectionTracker()
        tracker.select(["r1"], rows)
        calls = []
        tracker.on_change(calls.append)
        assert tracker.retain({"r1", "r2"}, rows) is None
        assert calls == []


class TestCallbacks:
    def test_every_operation_notifies(self, rows):
        tracker = SelectionTracker()
        received = []
        tracker.on_change(received.append)
        tracker.select(["r1"], rows)
        tracker.deselect("r1", rows)
        tracker.select_all(rows)
        tracker.deselect_all(rows)
        assert [c.action for c in received] == [
            ROW_SELECT, ROW_DESELECT, SELECT_ALL, DESELECT_ALL,
        ]
        assert all(isinstance(c, SelectionChange) for c in received)


class TestPayload:
    def test_payload_keys(self, rows):
        tracker = SelectionTracker()
        change = tracker.select(["r2"], rows)
        payload = change.to_payload()
        assert payload == {
            "selectedIds": ["r2"],
            "selectedRecords": [rows[1]],
            "deselectedRecords": [],
            "totalSelected": 1,
            "action": ROW_SELECT,
            "recordId": "r2",
        }
