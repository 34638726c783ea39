"""Error taxonomy and the typed result channel for recovered failures."""

from __future__ import annotations

from dataclasses import dataclass


class DataTableError(Exception):
    """Base exception for all advanced_datatable errors."""


class SortError(DataTableError):
    """Malformed sort request or a comparator failure."""


class LoadMoreError(DataTableError):
    """A page could not be appended to the visible window."""


class PasteError(DataTableError):
    """Pasted text could not be spliced into the search box."""


class SelectionActionError(DataTableError):
    """Selection event named an action the tracker does not know."""


class RowValidationError(DataTableError, ValueError):
    """Host rows are not usable (non-mapping rows, missing id field)."""


class ConfigError(DataTableError, ValueError):
    """Invalid table configuration."""


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one user-triggered table operation.

    Failed operations have already been recovered (last good state kept);
    the error is carried here for observability only.
    """

    operation: str
    ok: bool = True
    error: DataTableError | None = None

    @classmethod
    def success(cls, operation: str) -> OperationResult:
        return cls(operation=operation)

    @classmethod
    def failure(cls, operation: str, error: DataTableError) -> OperationResult:
        return cls(operation=operation, ok=False, error=error)

    def __bool__(self) -> bool:
        return self.ok
