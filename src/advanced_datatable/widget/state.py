"""TableState: reactive mirror of what a host renders for the table."""

from __future__ import annotations

import param


class TableState(param.Parameterized):
    """Observable table state.

    The DataTable pushes a fresh snapshot after every operation in a single
    batched update, so watchers never see a visible window that disagrees
    with the selection. Hosts subscribe explicitly::

        table.state.param.watch(render, ["visible_rows", "selected_ids"])
    """

    # --- Main table ---
    visible_rows = param.List(default=[], doc="Rendered prefix of the dataset")
    dataset_size = param.Integer(default=0, bounds=(0, None))
    has_more = param.Boolean(default=False)
    is_loading = param.Boolean(default=False)

    # --- Sort indicator ---
    sorted_by = param.String(default=None, allow_None=True)
    sorted_direction = param.Selector(default=None, objects=["asc", "desc"], allow_None=True)

    # --- Search ---
    search_value = param.String(default="")

    # --- Selection ---
    selected_ids = param.List(default=[])
    total_selected = param.Integer(default=0, bounds=(0, None))

    # --- Read-only selected rows table ---
    selected_rows = param.List(default=[], doc="Rendered prefix of the selected-rows view")
    selected_size = param.Integer(default=0, bounds=(0, None))
    has_more_selected = param.Boolean(default=False)
    is_readonly_loading = param.Boolean(default=False)
    selected_sorted_by = param.String(default=None, allow_None=True)
    selected_sorted_direction = param.Selector(
        default=None, objects=["asc", "desc"], allow_None=True
    )

    # --- Status text (last recovered failure, or empty) ---
    status_text = param.String(default="")
