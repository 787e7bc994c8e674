"""Rich rendering of the diff row model.

Shared by the interactive diff table and the ``--plain`` stdout output so
both show rows, markers and stats the same way.
"""

from __future__ import annotations

from typing import Optional, Sequence

from rich.table import Table
from rich.text import Text

from .config import config
from .diff_engine import DiffResult, DiffRow, DiffType
from .diff_filter import collapsed_gaps
from .text import clamp_line

REMOVED_STYLE = "red"
ADDED_STYLE = "green"
ABSENT_STYLE = "on grey11"
LINE_NUMBER_STYLE = "dim"

_LEFT_MARKED = (DiffType.DELETED, DiffType.MODIFIED)
_RIGHT_MARKED = (DiffType.ADDED, DiffType.MODIFIED)


def _plural(n: int) -> str:
    return "line" if n == 1 else "lines"


def stats_markup(result: Optional[DiffResult], pending: bool = False) -> str:
    """Summary line for the stats bar: counts, "Identical", or a hint when nothing ran yet."""
    suffix = "  [dim]updating…[/dim]" if pending else ""
    if result is None:
        return "[dim]Paste or load content above, then compare.[/dim]" + suffix
    stats = result.stats
    if not result.has_changes:
        return "[b]Diff[/b]  [dim]Identical[/dim]" + suffix
    parts = ["[b]Diff[/b]"]
    if stats.added_lines:
        parts.append(f"[{ADDED_STYLE}]+{stats.added_lines} {_plural(stats.added_lines)}[/{ADDED_STYLE}]")
    if stats.removed_lines:
        parts.append(f"[{REMOVED_STYLE}]-{stats.removed_lines} {_plural(stats.removed_lines)}[/{REMOVED_STYLE}]")
    return "  ".join(parts) + suffix


def _line_number(n: Optional[int], absent: bool) -> Text:
    return Text("" if n is None else str(n), style=ABSENT_STYLE if absent else LINE_NUMBER_STYLE, justify="right")


def _content(content: Optional[str], marker: str, style: Optional[str], max_chars: Optional[int]) -> Text:
    if content is None:
        return Text("", style=ABSENT_STYLE)
    line = clamp_line(content, max_chars)
    if style is None:
        return Text("  " + line)
    return Text.assemble((marker + " ", f"bold {style}"), (line, style))


def row_cells(row: DiffRow, max_chars: Optional[int] = None) -> tuple[Text, Text, Text, Text]:
    """Return (left no., left text, right no., right text) cells for one row."""
    if max_chars is None:
        max_chars = config.max_preview_chars
    left_style = REMOVED_STYLE if row.diff_type in _LEFT_MARKED else None
    right_style = ADDED_STYLE if row.diff_type in _RIGHT_MARKED else None
    return (
        _line_number(row.left_line_num, row.left_content is None),
        _content(row.left_content, "-", left_style, max_chars),
        _line_number(row.right_line_num, row.right_content is None),
        _content(row.right_content, "+", right_style, max_chars),
    )


def gap_cells(hidden: int) -> tuple[Text, Text, Text, Text]:
    """Separator cells standing in for rows folded away by the changes-only view."""
    label = Text(f"⋯ {hidden} unchanged {_plural(hidden)} ⋯", style="dim italic")
    return (Text(""), label, Text(""), Text(""))


def build_rich_table(
    result: DiffResult,
    indices: Sequence[int],
    left_title: str = "Original",
    right_title: str = "Modified",
    max_chars: Optional[int] = None,
) -> Table:
    """Build a side-by-side rich Table for the given row indices."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False, expand=True)
    table.add_column("", justify="right", no_wrap=True, width=5)
    table.add_column(left_title, ratio=1, overflow="fold")
    table.add_column("", justify="right", no_wrap=True, width=5)
    table.add_column(right_title, ratio=1, overflow="fold")

    gaps = {start: end - start for start, end in collapsed_gaps(len(result.rows), indices)}
    position = 0
    for i in indices:
        if position in gaps:
            table.add_row(*gap_cells(gaps[position]))
        table.add_row(*row_cells(result.rows[i], max_chars))
        position = i + 1
    if position in gaps:
        table.add_row(*gap_cells(gaps[position]))
    return table
