"""Tests for rich rendering of diff rows and stats."""

from rich.console import Console
from rich.table import Table

from split_diff.utils.diff_engine import DiffRow, DiffType, compute_diff
from split_diff.utils.diff_filter import changed_window_indices
from split_diff.utils.render import (
    ABSENT_STYLE,
    ADDED_STYLE,
    REMOVED_STYLE,
    build_rich_table,
    gap_cells,
    row_cells,
    stats_markup,
)


class TestStatsMarkup:
    """Test the stats bar summary."""

    def test_no_result(self):
        assert "Paste or load content" in stats_markup(None)

    def test_identical(self):
        assert "Identical" in stats_markup(compute_diff("a\n", "a\n"))

    def test_counts_and_plurals(self):
        markup = stats_markup(compute_diff("a\nb\n", "a\nx\ny\n"))
        assert "+2 lines" in markup
        assert "-1 line[" in markup

    def test_only_added(self):
        markup = stats_markup(compute_diff("a\n", "a\nb\n"))
        assert "+1 line" in markup
        assert "-" not in markup.replace("[/", "")

    def test_pending_suffix(self):
        assert "updating" in stats_markup(None, pending=True)
        assert "updating" not in stats_markup(None)


class TestRowCells:
    """Test per-row cells."""

    def test_modified_row_marked_on_both_sides(self):
        cells = row_cells(DiffRow(DiffType.MODIFIED, 2, 3, "old", "new"))
        left_num, left, right_num, right = cells
        assert left_num.plain == "2"
        assert right_num.plain == "3"
        assert left.plain == "- old"
        assert right.plain == "+ new"
        assert any(REMOVED_STYLE in str(span.style) for span in left.spans)
        assert any(ADDED_STYLE in str(span.style) for span in right.spans)

    def test_absent_side(self):
        left_num, left, _right_num, right = row_cells(DiffRow(DiffType.ADDED, None, 1, None, "new"))
        assert left_num.plain == ""
        assert left.plain == ""
        assert left.style == ABSENT_STYLE
        assert right.plain == "+ new"

    def test_unchanged_row_unmarked(self):
        _, left, _, right = row_cells(DiffRow(DiffType.UNCHANGED, 1, 1, "same", "same"))
        assert left.plain == "  same"
        assert right.plain == "  same"

    def test_long_lines_clamped(self):
        _, left, _, _ = row_cells(DiffRow(DiffType.UNCHANGED, 1, 1, "x" * 100, "x" * 100), max_chars=10)
        assert left.plain == "  " + "x" * 10 + " …"


class TestBuildRichTable:
    """Test the side-by-side table used by --plain."""

    def test_full_table(self):
        result = compute_diff("a\nb\nc\n", "a\nx\nc\n")
        table = build_rich_table(result, range(len(result.rows)))
        assert isinstance(table, Table)
        assert table.row_count == 3

    def test_gap_rows_for_folded_context(self):
        lines = [f"l{i}" for i in range(20)]
        changed = list(lines)
        changed[10] = "changed"
        result = compute_diff("\n".join(lines), "\n".join(changed))
        indices = changed_window_indices(result.rows, 1)
        table = build_rich_table(result, indices)
        # leading gap + 3 rows + trailing gap
        assert table.row_count == 5

        console = Console(width=120, record=True)
        console.print(table)
        assert "unchanged lines" in console.export_text()

    def test_gap_cells_label(self):
        assert gap_cells(1)[1].plain == "⋯ 1 unchanged line ⋯"
