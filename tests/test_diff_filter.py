"""Tests for the changes-only view."""

import pytest

from conftest import make_rows
from split_diff.utils.diff_engine import compute_diff
from split_diff.utils.diff_filter import (
    CONTEXT_RADIUS,
    changed_window_indices,
    collapsed_gaps,
    filter_changes_only,
)


class TestChangedWindowIndices:
    """Test context-window selection around changed rows."""

    def test_single_change_in_middle(self):
        rows = make_rows({10}, 20)
        assert changed_window_indices(rows, 3) == [7, 8, 9, 10, 11, 12, 13]

    def test_default_radius(self):
        rows = make_rows({10}, 20)
        assert CONTEXT_RADIUS == 3
        assert changed_window_indices(rows) == changed_window_indices(rows, 3)

    def test_clipped_at_edges(self):
        rows = make_rows({0, 19}, 20)
        assert changed_window_indices(rows, 2) == [0, 1, 2, 17, 18, 19]

    def test_overlapping_windows_merge(self):
        rows = make_rows({5, 8}, 20)
        assert changed_window_indices(rows, 2) == [3, 4, 5, 6, 7, 8, 9, 10]

    def test_zero_context_keeps_only_changes(self):
        rows = make_rows({2, 5}, 10)
        assert changed_window_indices(rows, 0) == [2, 5]

    def test_no_changes_is_empty(self):
        assert changed_window_indices(make_rows(set(), 10), 3) == []

    def test_empty_rows(self):
        assert changed_window_indices([], 3) == []

    def test_negative_context_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            changed_window_indices(make_rows({1}, 3), -1)


class TestFilterChangesOnly:
    """Test the row projection."""

    def test_returns_rows_in_order(self):
        rows = make_rows({10}, 20)
        kept = filter_changes_only(rows, 3)
        assert kept == rows[7:14]

    def test_does_not_mutate_input(self):
        rows = make_rows({1}, 5)
        snapshot = list(rows)
        filter_changes_only(rows, 1)
        assert rows == snapshot

    def test_identical_texts_filter_to_nothing(self):
        result = compute_diff("a\nb\n", "a\nb\n")
        assert filter_changes_only(result.rows) == []

    def test_huge_context_keeps_everything(self):
        rows = make_rows({4}, 10)
        assert filter_changes_only(rows, 100) == rows


class TestCollapsedGaps:
    """Test the folded ranges drawn as separators."""

    def test_gaps_around_window(self):
        assert collapsed_gaps(20, [7, 8, 9, 10, 11, 12, 13]) == [(0, 7), (14, 20)]

    def test_gap_between_windows(self):
        assert collapsed_gaps(10, [0, 1, 5, 6]) == [(2, 5), (7, 10)]

    def test_nothing_hidden(self):
        assert collapsed_gaps(3, [0, 1, 2]) == []

    def test_no_indices(self):
        assert collapsed_gaps(5, []) == []
