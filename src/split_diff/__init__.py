"""split_diff package initialization.

Re-exports the diff pipeline entry points so callers can diff two texts
without importing the Textual UI.
"""

from __future__ import annotations

from split_diff.utils.change_navigator import next_change
from split_diff.utils.diff_engine import DiffResult, DiffRow, DiffStats, DiffType, compute_diff
from split_diff.utils.diff_filter import filter_changes_only
from split_diff.utils.scheduler import schedule_recompute
from split_diff.utils.session import DiffSession

__version__ = "0.1.0"

__all__ = [
    "DiffResult",
    "DiffRow",
    "DiffSession",
    "DiffStats",
    "DiffType",
    "compute_diff",
    "filter_changes_only",
    "next_change",
    "schedule_recompute",
]
