from __future__ import annotations

from typing import Optional, Sequence

from textual.widgets import DataTable

from split_diff.utils.diff_engine import DiffResult
from split_diff.utils.diff_filter import collapsed_gaps
from split_diff.utils.render import gap_cells, row_cells


class DiffTable(DataTable):
    """Side-by-side table of diff rows.

    Keeps a map from row index (position in the full row sequence) to table
    row, so navigation can target a row regardless of filtering or the gap
    separators in between.
    """

    DEFAULT_CSS = """
    DiffTable {
        height: 1fr;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(cursor_type="row", zebra_stripes=False, **kwargs)
        self._positions: dict[int, int] = {}
        self.add_column("", key="left_num", width=5)
        self.add_column("Original", key="left")
        self.add_column("", key="right_num", width=5)
        self.add_column("Modified", key="right")

    def show(self, result: Optional[DiffResult], indices: Sequence[int], max_rows: Optional[int] = None) -> int:
        """Replace the table content with the given rows; returns how many rows were drawn."""
        self.clear()
        self._positions = {}
        if result is None:
            return 0

        shown = list(indices[:max_rows]) if max_rows is not None else list(indices)
        gaps = {start: end - start for start, end in collapsed_gaps(len(result.rows), indices)}
        position = 0
        for i in shown:
            if position in gaps:
                self.add_row(*gap_cells(gaps[position]), key=f"gap-{position}")
            self._positions[i] = self.row_count
            self.add_row(*row_cells(result.rows[i]), key=str(i))
            position = i + 1
        if len(shown) == len(indices) and position in gaps:
            self.add_row(*gap_cells(gaps[position]), key=f"gap-{position}")
        return len(shown)

    def table_row_for(self, row_index: int) -> Optional[int]:
        return self._positions.get(row_index)

    def select_row(self, row_index: int) -> bool:
        """Move the cursor to a diff row and scroll it into view."""
        position = self.table_row_for(row_index)
        if position is None:
            return False
        self.move_cursor(row=position)
        return True
