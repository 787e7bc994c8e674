import os
import sys
from typing import Callable, Iterator

import pytest

# Ensure local src path is importable
_here = os.path.dirname(os.path.dirname(__file__))
_src = os.path.join(_here, "src")
if os.path.isdir(_src) and _src not in sys.path:
    sys.path.insert(0, _src)

from split_diff.utils.diff_engine import DiffRow, DiffType  # noqa: E402


class FakeTimerHandle:
    """Timer handle returned by FakeClock; mirrors asyncio.TimerHandle.cancel()."""

    def __init__(self, due_ms: float, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeClock:
    """Deterministic stand-in for the event loop's call_later.

    Time is kept in milliseconds; ``advance_to`` fires every armed, uncancelled
    callback that is due, in due order.
    """

    def __init__(self):
        self.now_ms = 0.0
        self.handles: list[FakeTimerHandle] = []

    def timer(self, delay: float, callback: Callable[[], None]) -> FakeTimerHandle:
        handle = FakeTimerHandle(self.now_ms + round(delay * 1000), callback)
        self.handles.append(handle)
        return handle

    @property
    def armed(self) -> list[FakeTimerHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance_to(self, t_ms: float) -> None:
        while True:
            due = [h for h in self.armed if h.due_ms <= t_ms]
            if not due:
                break
            handle = min(due, key=lambda h: h.due_ms)
            handle.cancelled = True
            self.now_ms = handle.due_ms
            handle.callback()
        self.now_ms = t_ms

    def advance(self, delta_ms: float) -> None:
        self.advance_to(self.now_ms + delta_ms)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Fresh fake clock for debounce tests."""
    return FakeClock()


@pytest.fixture(autouse=True)
def _clean_pane_env(monkeypatch):
    """Keep pane paths from the developer's environment out of the tests."""
    monkeypatch.delenv("SPLIT_DIFF_LEFT", raising=False)
    monkeypatch.delenv("SPLIT_DIFF_RIGHT", raising=False)


@pytest.fixture
def pane_files(tmp_path) -> Iterator[tuple[str, str]]:
    """Create an original/modified pair of small text files."""
    left = tmp_path / "original.txt"
    right = tmp_path / "modified.txt"
    left.write_text("alpha\nbeta\ngamma\n", encoding="utf-8")
    right.write_text("alpha\nBETA\ngamma\ndelta\n", encoding="utf-8")
    yield str(left), str(right)


def make_rows(changed_at, total: int) -> list[DiffRow]:
    """Build ``total`` rows where the given indices are MODIFIED and the rest UNCHANGED."""
    rows = []
    for i in range(total):
        if i in changed_at:
            rows.append(DiffRow(DiffType.MODIFIED, i + 1, i + 1, f"old {i}", f"new {i}"))
        else:
            rows.append(DiffRow(DiffType.UNCHANGED, i + 1, i + 1, f"line {i}", f"line {i}"))
    return rows
