"""Dataset transforms: sorting, searching and selection reconciliation."""

from .sort import SortEngine, SortOutcome, SortSpec, compare_values
from .search import SearchEngine
from .reconcile import Reconciler

__all__ = [
    "SortEngine",
    "SortOutcome",
    "SortSpec",
    "compare_values",
    "SearchEngine",
    "Reconciler",
]
