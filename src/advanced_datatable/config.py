"""Table configuration: page size, id field, searchable fields and columns."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional, Tuple

from .core.errors import ConfigError
from .core.row_store import DEFAULT_PAGE_SIZE
from .core.rows import DEFAULT_ID_FIELD
from .core.validation import validate_fields, validate_page_size


@dataclass(frozen=True)
class ColumnSpec:
    """
    One displayed column.

    Fields:

    - label: Header text shown by the host.
    - field_name: Row field (dotted paths allowed) rendered in the column.
    - type: Host display type ("text", "phone", "number", ...).
    - sortable: If False, sort requests for this column are rejected.
    """

    label: str
    field_name: str
    type: str = "text"
    sortable: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ColumnSpec:
        field_name = data.get("field_name", data.get("fieldName"))
        if not field_name:
            raise ConfigError(f"Column is missing a field name: {data!r}")
        return cls(
            label=data.get("label", field_name),
            field_name=field_name,
            type=data.get("type", "text"),
            sortable=bool(data.get("sortable", True)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "fieldName": self.field_name,
            "type": self.type,
            "sortable": self.sortable,
        }


@dataclass(frozen=True)
class TableConfig:
    """
    Static configuration for a DataTable.

    Fields:

    - page_size: Rows added to the visible window per load-more.
    - id_field: Field holding each row's unique identifier.
    - searchable_fields: Fields the search box matches against. Defaults to
      the column field names when empty.
    - columns: Displayed columns, in order.
    """

    page_size: int = DEFAULT_PAGE_SIZE
    id_field: str = DEFAULT_ID_FIELD
    searchable_fields: Tuple[str, ...] = ()
    columns: Tuple[ColumnSpec, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        try:
            validate_page_size(self.page_size)
            object.__setattr__(self, "searchable_fields", validate_fields(self.searchable_fields))
        except ValueError as exc:
            raise ConfigError(str(exc)) from None
        if not isinstance(self.id_field, str) or not self.id_field:
            raise ConfigError(f"id_field must be a non-empty string, got {self.id_field!r}.")
        columns = tuple(
            c if isinstance(c, ColumnSpec) else ColumnSpec.from_dict(c)
            for c in self.columns
        )
        object.__setattr__(self, "columns", columns)

    @property
    def effective_searchable_fields(self) -> Tuple[str, ...]:
        if self.searchable_fields:
            return self.searchable_fields
        return tuple(c.field_name for c in self.columns)

    def column_for(self, field_name: str) -> Optional[ColumnSpec]:
        for column in self.columns:
            if column.field_name == field_name:
                return column
        return None

    def is_sortable(self, field_name: str) -> bool:
        """Unknown fields are sortable; only explicit sortable=False blocks."""
        column = self.column_for(field_name)
        return column is None or column.sortable

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["searchable_fields"] = list(self.searchable_fields)
        data["columns"] = [c.to_dict() for c in self.columns]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TableConfig:
        return cls(
            page_size=data.get("page_size", data.get("pageSize", DEFAULT_PAGE_SIZE)),
            id_field=data.get("id_field", data.get("idField", DEFAULT_ID_FIELD)),
            searchable_fields=tuple(
                data.get("searchable_fields", data.get("searchableFields")) or ()
            ),
            columns=tuple(data.get("columns") or ()),
        )
