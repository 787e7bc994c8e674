"""Diff computation for Split Diff.

This module turns two text blobs into the side-by-side row model the UI
renders: lines are split, diffed with the Myers edit script, and the
resulting spans are aligned into rows with line numbers and pairing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .myers import LineSpan, SpanKind, diff_lines
from .text import split_lines


class DiffType(Enum):
    """Enumeration of diff row types."""

    UNCHANGED = "equal"
    ADDED = "added"
    DELETED = "removed"
    MODIFIED = "changed"


@dataclass(frozen=True)
class DiffRow:
    """Represents a single row in a diff comparison.

    A side whose content is None has no line number either; at least one
    side is always present.
    """

    diff_type: DiffType
    left_line_num: Optional[int]
    right_line_num: Optional[int]
    left_content: Optional[str]
    right_content: Optional[str]

    @property
    def is_change(self) -> bool:
        return self.diff_type is not DiffType.UNCHANGED


@dataclass(frozen=True)
class DiffStats:
    """Added/removed line counts over a full row sequence."""

    added_lines: int = 0
    removed_lines: int = 0


@dataclass(frozen=True)
class DiffResult:
    """Rows and stats produced by one full recomputation."""

    rows: tuple[DiffRow, ...]
    stats: DiffStats

    @property
    def has_changes(self) -> bool:
        return any(row.is_change for row in self.rows)

    @property
    def changed_indices(self) -> list[int]:
        return [i for i, row in enumerate(self.rows) if row.is_change]


def compute_diff(original: str, modified: str) -> DiffResult:
    """Run the full pipeline on two text blobs - orchestrator for diff computation.

    Args:
        original: Text shown in the left pane
        modified: Text shown in the right pane

    Returns:
        DiffResult with the aligned rows and their stats
    """
    spans = diff_lines(split_lines(original), split_lines(modified))
    rows = build_rows(spans)
    return DiffResult(rows=tuple(rows), stats=compute_stats(rows))


def build_rows(spans: Sequence[LineSpan]) -> list[DiffRow]:
    """Align an edit script into side-by-side rows.

    A DELETED span directly followed by an INSERTED span is a replace pair
    and is zipped into MODIFIED rows. Pairing looks exactly one span ahead.
    """
    state = _initialize_row_state()

    i = 0
    while i < len(spans):
        span = spans[i]
        following = spans[i + 1] if i + 1 < len(spans) else None

        if span.kind is SpanKind.EQUAL:
            _handle_equal_span(span, state)
            i += 1
        elif span.kind is SpanKind.DELETED and following is not None and following.kind is SpanKind.INSERTED:
            _handle_replace_pair(span, following, state)
            i += 2
        elif span.kind is SpanKind.DELETED:
            _handle_deleted_span(span, state)
            i += 1
        else:
            _handle_inserted_span(span, state)
            i += 1

    return state["rows"]


def compute_stats(rows: Sequence[DiffRow]) -> DiffStats:
    """Count added and removed lines from the emitted rows."""
    added = sum(
        1 for row in rows
        if row.right_content is not None and row.diff_type in (DiffType.ADDED, DiffType.MODIFIED)
    )
    removed = sum(
        1 for row in rows
        if row.left_content is not None and row.diff_type in (DiffType.DELETED, DiffType.MODIFIED)
    )
    return DiffStats(added_lines=added, removed_lines=removed)


def _initialize_row_state() -> dict:
    """Initialize state for row alignment."""
    return {
        "rows": [],
        "old_idx": 1,
        "new_idx": 1,
    }


def _handle_equal_span(span: LineSpan, state: dict):
    """Emit one UNCHANGED row per shared line."""
    for line in span.lines:
        state["rows"].append(
            DiffRow(
                diff_type=DiffType.UNCHANGED,
                left_line_num=state["old_idx"],
                right_line_num=state["new_idx"],
                left_content=line,
                right_content=line,
            )
        )
        _increment_both_indices(state)


def _handle_replace_pair(deleted: LineSpan, inserted: LineSpan, state: dict):
    """Zip a deletion with the insertion that follows it into MODIFIED rows."""
    for k in range(max(len(deleted), len(inserted))):
        state["rows"].append(_create_replace_row(deleted, inserted, k, state))
        _update_indices_for_replace(deleted, inserted, k, state)


def _handle_deleted_span(span: LineSpan, state: dict):
    """Emit one DELETED row per line with the right side absent."""
    for line in span.lines:
        state["rows"].append(
            DiffRow(
                diff_type=DiffType.DELETED,
                left_line_num=state["old_idx"],
                right_line_num=None,
                left_content=line,
                right_content=None,
            )
        )
        _increment_old_index(state)


def _handle_inserted_span(span: LineSpan, state: dict):
    """Emit one ADDED row per line with the left side absent."""
    for line in span.lines:
        state["rows"].append(
            DiffRow(
                diff_type=DiffType.ADDED,
                left_line_num=None,
                right_line_num=state["new_idx"],
                left_content=None,
                right_content=line,
            )
        )
        _increment_new_index(state)


def _create_replace_row(deleted: LineSpan, inserted: LineSpan, k: int, state: dict) -> DiffRow:
    """Create row k of a replace pair; a side that ran out is absent."""
    has_left = k < len(deleted)
    has_right = k < len(inserted)

    return DiffRow(
        diff_type=DiffType.MODIFIED,
        left_line_num=state["old_idx"] if has_left else None,
        right_line_num=state["new_idx"] if has_right else None,
        left_content=deleted.lines[k] if has_left else None,
        right_content=inserted.lines[k] if has_right else None,
    )


def _increment_both_indices(state: dict):
    """Increment both old and new line indices."""
    state["old_idx"] += 1
    state["new_idx"] += 1


def _increment_old_index(state: dict):
    """Increment only the old line index."""
    state["old_idx"] += 1


def _increment_new_index(state: dict):
    """Increment only the new line index."""
    state["new_idx"] += 1


def _update_indices_for_replace(deleted: LineSpan, inserted: LineSpan, k: int, state: dict):
    """Advance whichever sides row k of a replace pair consumed."""
    if k < len(deleted):
        _increment_old_index(state)
    if k < len(inserted):
        _increment_new_index(state)
