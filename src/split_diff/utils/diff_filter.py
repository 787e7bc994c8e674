"""Changes-only view over a diff row sequence.

Keeps every changed row plus a fixed window of context rows around it. The
projection is pure: it never mutates the rows and is simply recomputed
whenever the rows or the radius change.
"""

from __future__ import annotations

from typing import Sequence

from .diff_engine import DiffRow

CONTEXT_RADIUS = 3


def changed_window_indices(rows: Sequence[DiffRow], context: int = CONTEXT_RADIUS) -> list[int]:
    """Return, in order, the indices of rows within ``context`` of a changed row.

    Args:
        rows: Full (unfiltered) row sequence
        context: Number of rows kept on each side of a change

    Returns:
        Sorted list of row indices; empty when nothing changed

    Raises:
        ValueError: If context is negative
    """
    if context < 0:
        raise ValueError(f"context radius must be non-negative, got {context}")

    keep: set[int] = set()
    last = len(rows) - 1
    for i, row in enumerate(rows):
        if row.is_change:
            keep.update(range(max(0, i - context), min(last, i + context) + 1))
    return sorted(keep)


def filter_changes_only(rows: Sequence[DiffRow], context: int = CONTEXT_RADIUS) -> list[DiffRow]:
    """Return the rows retained by the changes-only view."""
    return [rows[i] for i in changed_window_indices(rows, context)]


def collapsed_gaps(total_rows: int, indices: Sequence[int]) -> list[tuple[int, int]]:
    """Return ``(start, end)`` half-open ranges of rows hidden by the filter.

    Lets a renderer draw a separator where unchanged rows were folded away.
    """
    gaps: list[tuple[int, int]] = []
    expected = 0
    for i in indices:
        if i > expected:
            gaps.append((expected, i))
        expected = i + 1
    if indices and expected < total_rows:
        gaps.append((expected, total_rows))
    return gaps
