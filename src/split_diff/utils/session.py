"""UI-facing state holder for one two-pane diff session.

The session owns both panes' text and syntax mode, decides when the pipeline
runs (debounced in live mode, on demand in manual mode), and keeps the latest
published result together with its change navigator. Widgets only report
edits and render what the session exposes.
"""

from __future__ import annotations

from typing import Callable, Optional

from .change_navigator import NO_SELECTION, ChangeNavigator
from .config import config
from .diff_engine import DiffResult, DiffRow, compute_diff
from .diff_filter import changed_window_indices
from .logger import log
from .pane_sync import LANGUAGE_VALUES, LEFT, RIGHT, PaneState, PaneSynchronizer, check_side
from .scheduler import RecomputeScheduler, TimerFactory

STATUS_IDLE = "idle"
STATUS_IDENTICAL = "identical"
STATUS_CHANGED = "changed"


class DiffSession:
    """Live or manual diffing of a left (original) and right (modified) pane."""

    def __init__(
        self,
        *,
        live: Optional[bool] = None,
        debounce_ms: Optional[int] = None,
        context_lines: Optional[int] = None,
        timer: Optional[TimerFactory] = None,
        on_result: Optional[Callable[[Optional[DiffResult]], None]] = None,
    ):
        self.live = config.live if live is None else live
        self.context_lines = config.context_lines if context_lines is None else context_lines
        self.changes_only = False
        self.panes: dict[str, PaneState] = {LEFT: PaneState(), RIGHT: PaneState()}
        self.sync = PaneSynchronizer(self.panes)
        self._scheduler = RecomputeScheduler(self._recompute, debounce_ms, timer=timer)
        self._navigator = ChangeNavigator()
        self._result: Optional[DiffResult] = None
        self._on_result = on_result
        # Request numbers handed out / last one whose result was shown
        self._request_seq = 0
        self._published_seq = 0

    # State

    @property
    def result(self) -> Optional[DiffResult]:
        """Latest published result; None until something has been compared."""
        return self._result

    @property
    def pending(self) -> bool:
        return self._scheduler.pending

    @property
    def status(self) -> str:
        """``idle`` (nothing computed), ``identical`` or ``changed``."""
        if self._result is None:
            return STATUS_IDLE
        return STATUS_CHANGED if self._result.has_changes else STATUS_IDENTICAL

    @property
    def debounce_ms(self) -> int:
        return self._scheduler.debounce_ms

    @property
    def selected_change(self) -> int:
        return self._navigator.current_row

    def text(self, side: str) -> str:
        return self.panes[check_side(side)].text

    def language(self, side: str) -> str:
        return self.panes[check_side(side)].language

    # Inbound edits and external mutations

    def edit(self, side: str, text: str) -> bool:
        """Handle a content report from an editing surface.

        Returns False when the report was an echo of a programmatic write.
        """
        if not self.sync.on_surface_changed(side, text):
            return False
        self._content_changed()
        return True

    def load(self, side: str, text: str) -> None:
        """Replace a pane's content from outside the editor (e.g. a file)."""
        self.sync.push(side, text)
        self._content_changed()

    def set_language(self, side: str, language: str) -> None:
        if language not in LANGUAGE_VALUES:
            raise ValueError(f"unknown language {language!r}")
        self.panes[check_side(side)].language = language

    def swap(self) -> None:
        """Exchange text and language of both panes in one step."""
        left, right = self.panes[LEFT], self.panes[RIGHT]
        left.language, right.language = right.language, left.language
        left_text, right_text = left.text, right.text
        self.sync.push(LEFT, right_text)
        self.sync.push(RIGHT, left_text)
        log.debug("[SESSION] Swapped panes")

        if self.live:
            self._scheduler.trigger()
        elif self._result is not None:
            # A visible manual result follows the swap immediately
            self.compare()

    def clear(self) -> None:
        """Empty both panes and forget any pending or published result."""
        self._scheduler.cancel()
        self.sync.push(LEFT, "")
        self.sync.push(RIGHT, "")
        # Invalidate anything still in flight
        self._request_seq += 1
        self._published_seq = self._request_seq
        self._result = None
        self._navigator.reset(())
        log.debug("[SESSION] Cleared panes")
        self._notify()

    def compare(self) -> DiffResult:
        """Diff the current content synchronously, dropping any armed timer."""
        self._scheduler.cancel()
        return self._recompute()

    def set_live(self, live: bool) -> None:
        """Switch between live diffing and compare-on-demand."""
        if live == self.live:
            return
        self.live = live
        if live:
            self._scheduler.trigger()
        else:
            self._scheduler.cancel()

    def flush(self) -> bool:
        """Run a pending live recompute now."""
        return self._scheduler.flush()

    def close(self) -> None:
        """Drop any armed recompute; the session keeps its content and result."""
        self._scheduler.cancel()

    def _content_changed(self) -> None:
        if self.live:
            self._scheduler.trigger()

    # Publishing

    def begin_request(self) -> int:
        """Hand out the sequence number for a new recompute request."""
        self._request_seq += 1
        return self._request_seq

    def publish(self, seq: int, result: DiffResult) -> bool:
        """Show ``result`` unless a later request has already been published."""
        if seq <= self._published_seq:
            log.debug(f"[SESSION] Dropping stale result #{seq} (published #{self._published_seq})")
            return False
        self._published_seq = seq
        self._result = result
        self._navigator.reset(result.rows)
        log.debug(
            f"[SESSION] Published result #{seq}: {len(result.rows)} rows, "
            f"+{result.stats.added_lines} -{result.stats.removed_lines}"
        )
        self._notify()
        return True

    def _recompute(self) -> DiffResult:
        seq = self.begin_request()
        result = compute_diff(self.panes[LEFT].text, self.panes[RIGHT].text)
        self.publish(seq, result)
        return result

    def _notify(self) -> None:
        if self._on_result is not None:
            self._on_result(self._result)

    # Views over the result

    def toggle_changes_only(self) -> bool:
        self.changes_only = not self.changes_only
        return self.changes_only

    def visible_indices(self) -> list[int]:
        """Row indices to display, honouring the changes-only toggle."""
        if self._result is None:
            return []
        if self.changes_only:
            return changed_window_indices(self._result.rows, self.context_lines)
        return list(range(len(self._result.rows)))

    def visible_rows(self) -> list[DiffRow]:
        if self._result is None:
            return []
        return [self._result.rows[i] for i in self.visible_indices()]

    def next_change(self) -> int:
        """Select the next changed row (circular); NO_SELECTION when there is none."""
        if self._result is None:
            return NO_SELECTION
        return self._navigator.next()

    def previous_change(self) -> int:
        if self._result is None:
            return NO_SELECTION
        return self._navigator.previous()
