"""Sequential "jump to next change" traversal over diff rows."""

from __future__ import annotations

from typing import Sequence

from .diff_engine import DiffRow

NO_SELECTION = -1


def next_change(rows: Sequence[DiffRow], current_index: int = NO_SELECTION) -> int:
    """Return the index of the first changed row after ``current_index``, wrapping around.

    Total over its domain: returns NO_SELECTION when no row changed, and the
    first changed row when nothing is selected yet.
    """
    changed = [i for i, row in enumerate(rows) if row.is_change]
    if not changed:
        return NO_SELECTION
    for i in changed:
        if i > current_index:
            return i
    return changed[0]


class ChangeNavigator:
    """Cursor over the changed-row indices of one recomputation.

    The index list is independent of the changes-only filter; it always
    refers to positions in the full row sequence.
    """

    def __init__(self, rows: Sequence[DiffRow] = ()):
        self._changed: list[int] = []
        self._cursor = NO_SELECTION
        self.reset(rows)

    def reset(self, rows: Sequence[DiffRow]) -> None:
        """Rebuild the index from a fresh row sequence and clear the selection."""
        self._changed = [i for i, row in enumerate(rows) if row.is_change]
        self._cursor = NO_SELECTION

    @property
    def changed_indices(self) -> list[int]:
        return list(self._changed)

    @property
    def current_row(self) -> int:
        """Row index of the selected change, or NO_SELECTION."""
        if self._cursor == NO_SELECTION:
            return NO_SELECTION
        return self._changed[self._cursor]

    def next(self) -> int:
        """Advance circularly and return the selected row index."""
        if not self._changed:
            return NO_SELECTION
        self._cursor = (self._cursor + 1) % len(self._changed)
        return self._changed[self._cursor]

    def previous(self) -> int:
        """Step back circularly; from no selection this lands on the last change."""
        if not self._changed:
            return NO_SELECTION
        if self._cursor == NO_SELECTION:
            self._cursor = len(self._changed) - 1
        else:
            self._cursor = (self._cursor - 1) % len(self._changed)
        return self._changed[self._cursor]

    def __len__(self) -> int:
        return len(self._changed)
