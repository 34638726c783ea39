"""advanced-datatable: headless data table with selection that survives paging, sorting and search."""

from ._version import __version__
from .config import ColumnSpec, TableConfig
from .core.errors import (
    DataTableError,
    SortError,
    LoadMoreError,
    PasteError,
    SelectionActionError,
    RowValidationError,
    ConfigError,
    OperationResult,
)
from .core.row_store import RowStore
from .core.selection import SelectionChange, SelectionTracker
from .transform.sort import SortEngine, SortSpec
from .transform.search import SearchEngine
from .transform.reconcile import Reconciler
from .widget.table import DataTable
from .logging_config import configure_logging


__all__ = [
    "__version__",
    "DataTable",
    "TableConfig",
    "ColumnSpec",
    "RowStore",
    "SelectionTracker",
    "SelectionChange",
    "SortEngine",
    "SortSpec",
    "SearchEngine",
    "Reconciler",
    "configure_logging",
    "DataTableError",
    "SortError",
    "LoadMoreError",
    "PasteError",
    "SelectionActionError",
    "RowValidationError",
    "ConfigError",
    "OperationResult",
]
