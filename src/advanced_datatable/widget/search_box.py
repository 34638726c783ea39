"""SearchBox: raw search text held by the table's input widget."""

from __future__ import annotations

from ..core.errors import PasteError
from ..transform.search import SearchEngine


class SearchBox:
    """Search input state, including paste-at-cursor handling.

    Pasted multi-line text (e.g. a column copied from a spreadsheet) is
    converted to a comma list before it reaches the value, since the
    search engine only recognizes commas as the list delimiter.
    """

    def __init__(self, value: str = "") -> None:
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    def set_value(self, raw: str | None) -> str:
        """Store typed text; whitespace-only input clears the box."""
        self._value = raw if raw and raw.strip() else ""
        return self._value

    def paste(
        self,
        text: str,
        selection_start: int | None = None,
        selection_end: int | None = None,
    ) -> tuple[str, int]:
        """Splice pasted text over ``[selection_start, selection_end)``.

        Without a selection range the text is appended. Returns the new
        value and the cursor position after the pasted text. On error the
        value is left unchanged.
        """
        if not isinstance(text, str):
            raise PasteError(f"Pasted content must be text, got {type(text).__name__}.")
        current = self._value
        start = len(current) if selection_start is None else selection_start
        end = start if selection_end is None else selection_end
        for name, pos in (("selection_start", start), ("selection_end", end)):
            if isinstance(pos, bool) or not isinstance(pos, int):
                raise PasteError(f"{name} must be an integer, got {pos!r}.")
        if not 0 <= start <= end <= len(current):
            raise PasteError(
                f"Invalid paste range [{start}, {end}) for a value of "
                f"length {len(current)}."
            )

        pasted = SearchEngine.normalize_paste(text)
        self._value = current[:start] + pasted + current[end:]
        return self._value, start + len(pasted)

    def __repr__(self) -> str:
        return f"SearchBox(value={self._value!r})"
