"""Line diff for Split Diff using Myers' O(ND) shortest edit script.

The search walks diagonals ``k = x - y`` of the edit graph, keeping for every
edit distance ``d`` the furthest x reached on each diagonal. The frontier is a
flat list indexed by diagonal; before each step the slice of diagonals that
step can read is kept, so the path can be recovered by walking the slices
backwards. Diagonals that would leave the grid are never visited, so every
recorded point is a real position in both sequences.

Lines that appear on only one side can never be part of a match. They are set
aside before the search and come back as plain deletions and insertions, so a
fully rewritten text costs no search at all.

When an insertion and a deletion reach the same point the insertion (the step
down from diagonal k+1) is taken, and each snake is followed as far as it
goes. Together this gives the usual left-biased alignment: shared lines are
matched as early as possible.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class SpanKind(Enum):
    """Classification of a run of lines in the edit script."""

    EQUAL = "equal"
    INSERTED = "inserted"
    DELETED = "deleted"


@dataclass(frozen=True)
class LineSpan:
    """A maximal run of lines sharing one classification."""

    kind: SpanKind
    lines: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.lines)


Edit = tuple[SpanKind, str]

# Frontier value of a diagonal no path has reached
UNREACHED = -1

# (lowest diagonal, furthest x per diagonal from there on)
Snapshot = tuple[int, list[int]]


def _choose_move(down: int, right: int, k: int, n: int, m: int) -> tuple[int, int] | None:
    """Pick how diagonal k is entered from the previous frontier.

    ``down`` and ``right`` are the frontier x on diagonals k+1 and k-1.
    Returns ``(prev_k, x)`` where x is where k's snake starts, or None when
    neither neighbour can step onto k without leaving the grid.
    """
    # insertion: one step down from diagonal k+1
    x_down = down if down != UNREACHED and down - k <= m else UNREACHED
    # deletion: one step right from diagonal k-1
    x_right = right + 1 if right != UNREACHED and right < n else UNREACHED

    if x_down == UNREACHED and x_right == UNREACHED:
        return None
    if x_right == UNREACHED or (x_down != UNREACHED and x_down >= x_right):
        return k + 1, x_down
    return k - 1, x_right


def _snapshot_x(snapshot: Snapshot, k: int) -> int:
    lo, xs = snapshot
    i = k - lo
    return xs[i] if 0 <= i < len(xs) else UNREACHED


def _shortest_edit_trace(a: Sequence[str], b: Sequence[str]) -> list[Snapshot]:
    """Run the forward search, returning the frontier slice taken before each d."""
    n, m = len(a), len(b)
    # Diagonals -m-1 .. n+1 map to indices 0 .. n+m+2
    offset = m + 1
    v = [UNREACHED] * (n + m + 3)
    v[offset + 1] = 0
    trace: list[Snapshot] = []

    for d in range(n + m + 1):
        lo = max(-d - 1, -m - 1)
        hi = min(d + 1, n + 1)
        trace.append((lo, v[lo + offset:hi + offset + 1]))

        # Only diagonals inside the grid with the parity of d
        k_lo = -d if d <= m else -m + ((d - m) & 1)
        k_hi = d if d <= n else n - ((d - n) & 1)
        for k in range(k_lo, k_hi + 1, 2):
            move = _choose_move(v[k + 1 + offset], v[k - 1 + offset], k, n, m)
            if move is None:
                v[k + offset] = UNREACHED
                continue

            x = move[1]
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            v[k + offset] = x

            if x >= n and y >= m:
                return trace

    return trace


def _matched_pairs(a: Sequence[str], b: Sequence[str]) -> list[tuple[int, int]]:
    """Return the ``(i, j)`` index pairs with ``a[i] == b[j]`` on the shortest path."""
    trace = _shortest_edit_trace(a, b)
    n, m = len(a), len(b)
    x, y = n, m
    pairs: list[tuple[int, int]] = []

    for d in range(len(trace) - 1, 0, -1):
        snapshot = trace[d]
        k = x - y
        prev_k, start_x = _choose_move(
            _snapshot_x(snapshot, k + 1), _snapshot_x(snapshot, k - 1), k, n, m
        )
        prev_x = _snapshot_x(snapshot, prev_k)

        while x > start_x:
            x -= 1
            y -= 1
            pairs.append((x, y))
        x, y = prev_x, prev_x - prev_k

    # d == 0: whatever is left is the common prefix
    while x > 0:
        x -= 1
        y -= 1
        pairs.append((x, y))

    pairs.reverse()
    return pairs


def myers_edits(a: Sequence[str], b: Sequence[str]) -> list[Edit]:
    """Return the per-line shortest edit script turning ``a`` into ``b``.

    Each entry is ``(kind, line)``; EQUAL and DELETED lines come from ``a``,
    INSERTED lines from ``b``. Between two matches deletions come first.
    """
    in_a, in_b = set(a), set(b)
    a_index = [i for i, line in enumerate(a) if line in in_b]
    b_index = [j for j, line in enumerate(b) if line in in_a]
    pairs = _matched_pairs([a[i] for i in a_index], [b[j] for j in b_index])

    edits: list[Edit] = []
    x = y = 0
    for i, j in [(a_index[p], b_index[q]) for p, q in pairs] + [(len(a), len(b))]:
        edits.extend((SpanKind.DELETED, line) for line in a[x:i])
        edits.extend((SpanKind.INSERTED, line) for line in b[y:j])
        if i < len(a):
            edits.append((SpanKind.EQUAL, a[i]))
        x, y = i + 1, j + 1
    return edits


def _flush_equal(spans: list[LineSpan], equal: list[str]) -> None:
    if equal:
        spans.append(LineSpan(SpanKind.EQUAL, tuple(equal)))
        equal.clear()


def _flush_hunk(spans: list[LineSpan], deleted: list[str], inserted: list[str]) -> None:
    # Deletions always precede insertions within one hunk
    if deleted:
        spans.append(LineSpan(SpanKind.DELETED, tuple(deleted)))
        deleted.clear()
    if inserted:
        spans.append(LineSpan(SpanKind.INSERTED, tuple(inserted)))
        inserted.clear()


def diff_lines(a: Sequence[str], b: Sequence[str]) -> list[LineSpan]:
    """Compute the edit script between two line sequences as ordered spans.

    Runs of non-equal edits between two equal runs form a hunk, emitted as at
    most one DELETED span followed by at most one INSERTED span.

    Args:
        a: Original lines
        b: Modified lines

    Returns:
        List of LineSpan objects; projecting EQUAL+DELETED spans gives ``a``
        and EQUAL+INSERTED spans gives ``b``.
    """
    spans: list[LineSpan] = []
    equal: list[str] = []
    deleted: list[str] = []
    inserted: list[str] = []

    for kind, line in myers_edits(a, b):
        if kind is SpanKind.EQUAL:
            _flush_hunk(spans, deleted, inserted)
            equal.append(line)
        else:
            _flush_equal(spans, equal)
            (deleted if kind is SpanKind.DELETED else inserted).append(line)

    _flush_equal(spans, equal)
    _flush_hunk(spans, deleted, inserted)
    return spans
