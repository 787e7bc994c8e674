"""Two-pane compare screen: editors on top, aligned diff below.

The screen is a thin shell around a DiffSession. Editors report every change
to the session, the session decides when to recompute (debounced in live
mode, on Compare otherwise) and calls back with the new result, which is
rendered into the stats bar and the diff table.

Keys (also shown in the footer):
- Ctrl+R compare now, Ctrl+S swap panes, Ctrl+L clear both panes
- Ctrl+T toggle live diffing, Ctrl+G toggle changes-only view
- F7 / Shift+F7 jump to next / previous change
- Ctrl+O open a file into the focused pane
"""

from __future__ import annotations

from typing import Callable, Optional

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Select, Static, TextArea

from split_diff.screens.open_file import OpenFileScreen
from split_diff.utils.base_screen import BaseScreen
from split_diff.utils.change_navigator import NO_SELECTION
from split_diff.utils.config import config
from split_diff.utils.diff_engine import DiffResult
from split_diff.utils.error_handling import log_ui_error, log_watchdog_error
from split_diff.utils.io import safe_read_file
from split_diff.utils.logger import log
from split_diff.utils.pane_sync import LEFT, RIGHT, SIDES
from split_diff.utils.render import stats_markup
from split_diff.utils.scheduler import TimerFactory
from split_diff.utils.session import DiffSession
from split_diff.utils.watchdog import watch_file
from split_diff.widgets.diff_table import DiffTable
from split_diff.widgets.editor_pane import EditorPane
from split_diff.widgets.toolbar import Toolbar

PANE_LABELS = {LEFT: "Original", RIGHT: "Modified"}


class DiffScreen(BaseScreen):
    """Edit two texts side by side and see their line diff update live."""

    BINDINGS = [
        Binding("ctrl+r", "compare", "Compare", priority=True),
        Binding("ctrl+s", "swap", "Swap", priority=True),
        Binding("ctrl+l", "clear", "Clear", priority=True),
        Binding("ctrl+t", "toggle_live", "Live", priority=True),
        Binding("ctrl+g", "toggle_changes_only", "Changes Only", priority=True),
        Binding("f7", "next_change", "Next Change", priority=True),
        Binding("shift+f7", "previous_change", "Prev Change", priority=True),
        Binding("ctrl+o", "open_file", "Open File", priority=True),
    ]

    DEFAULT_CSS = """
    #diff-root {
        width: 100%;
        height: 100%;
    }
    #editors {
        height: 1fr;
    }
    #stats-bar {
        height: 1;
        padding: 0 1;
        background: $panel;
    }
    #diff-table {
        height: 1fr;
    }
    """

    def __init__(
        self,
        left_text: Optional[str] = None,
        right_text: Optional[str] = None,
        *,
        left_language: str = "text",
        right_language: str = "text",
        left_path: Optional[str] = None,
        right_path: Optional[str] = None,
        live: Optional[bool] = None,
        debounce_ms: Optional[int] = None,
        context_lines: Optional[int] = None,
        watch: bool = False,
        changes_only: bool = False,
        timer: Optional[TimerFactory] = None,
    ) -> None:
        super().__init__(page_name="Compare")
        self.session = DiffSession(
            live=live,
            debounce_ms=debounce_ms,
            context_lines=context_lines,
            timer=timer,
            on_result=self._show_result,
        )
        self.session.changes_only = changes_only
        # Files named without preloaded text are read here
        for side, text, path in ((LEFT, left_text, left_path), (RIGHT, right_text, right_path)):
            if text is None and path:
                text = safe_read_file(path).content
            self.session.panes[side].text = text or ""
        self.session.set_language(LEFT, left_language)
        self.session.set_language(RIGHT, right_language)
        self._paths: dict[str, Optional[str]] = {LEFT: left_path, RIGHT: right_path}
        self._watch_files = watch
        self._watch_stops: dict[str, Callable[[], None]] = {}
        self._last_side = LEFT

    def compose_main_content(self) -> ComposeResult:
        """Build the editors, toolbar, stats bar and diff table."""
        with Vertical(id="diff-root"):
            with Horizontal(id="editors"):
                for side in SIDES:
                    yield EditorPane(
                        side,
                        PANE_LABELS[side],
                        self.session.text(side),
                        self.session.language(side),
                        id=f"pane-{side}",
                    )
            yield Toolbar(live=self.session.live, changes_only=self.session.changes_only, id="toolbar")
            yield Static("", id="stats-bar")
            yield DiffTable(id="diff-table")

    def get_footer_text(self) -> str:
        """Return footer text reflecting the live and changes-only toggles."""
        live_state = "ON" if self.session.live else "OFF"
        changes_state = "ON" if self.session.changes_only else "OFF"
        return (
            " [orange1]Ctrl+R[/orange1] Compare    "
            "[orange1]Ctrl+S[/orange1] Swap    "
            "[orange1]Ctrl+L[/orange1] Clear    "
            f"[orange1]Ctrl+T[/orange1] Live: {live_state}    "
            f"[orange1]Ctrl+G[/orange1] Changes only: {changes_state}    "
            "[orange1]F7[/orange1] Next change    "
            "[orange1]Ctrl+O[/orange1] Open"
        )

    async def on_mount(self):
        """Attach the editors to the session, show any preloaded diff and start watchers."""
        await super().on_mount()
        for side in SIDES:
            self.session.sync.attach(side, self._pane(side))

        if self.session.text(LEFT) or self.session.text(RIGHT):
            self.session.compare()
        else:
            self._refresh_view()

        for side in SIDES:
            self._start_watcher(side)

    def on_unmount(self) -> None:
        """Stop watchers and drop any armed recompute when leaving the screen."""
        self.session.close()
        for side in SIDES:
            self._stop_watcher(side)

    # Widgets

    def _pane(self, side: str) -> EditorPane:
        return self.query_one(f"#pane-{side}", EditorPane)

    def _table(self) -> DiffTable:
        return self.query_one("#diff-table", DiffTable)

    # Inbound events

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        """Forward user edits to the session; echoes of programmatic writes are ignored there."""
        side = self._side_for_id(event.text_area.id, "editor-")
        if side is None:
            return
        if self.session.edit(side, event.text_area.text):
            self._update_stats()

    def on_select_changed(self, event: Select.Changed) -> None:
        side = self._side_for_id(event.select.id, "lang-")
        if side is None or not isinstance(event.value, str):
            return
        if event.value != self.session.language(side):
            self.session.set_language(side, event.value)
            self._pane(side).apply_language(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Route toolbar buttons to the matching actions."""
        button_to_action = {
            "compare_button": self.action_compare,
            "swap_button": self.action_swap,
            "clear_button": self.action_clear,
            "live_button": self.action_toggle_live,
            "changes_button": self.action_toggle_changes_only,
            "next_change_button": self.action_next_change,
        }
        action = button_to_action.get(event.button.id)
        if action:
            action()

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        node = event.widget
        while node is not None:
            if isinstance(node, EditorPane):
                self._last_side = node.side
                return
            node = node.parent

    @staticmethod
    def _side_for_id(widget_id: Optional[str], prefix: str) -> Optional[str]:
        if not widget_id or not widget_id.startswith(prefix):
            return None
        side = widget_id[len(prefix):]
        return side if side in SIDES else None

    # Actions

    def action_compare(self) -> None:
        self.session.compare()

    def action_swap(self) -> None:
        """Exchange content, language and source file of both panes."""
        self.session.swap()
        self._paths[LEFT], self._paths[RIGHT] = self._paths[RIGHT], self._paths[LEFT]
        for side in SIDES:
            self._pane(side).set_language(self.session.language(side))
            self._start_watcher(side)
        self._update_stats()

    def action_clear(self) -> None:
        for side in SIDES:
            self._paths[side] = None
            self._stop_watcher(side)
        self.session.clear()

    def action_toggle_live(self) -> None:
        self.session.set_live(not self.session.live)
        self._refresh_toggles()
        self._update_stats()

    def action_toggle_changes_only(self) -> None:
        self.session.toggle_changes_only()
        self._refresh_toggles()
        self._render_table()

    def action_next_change(self) -> None:
        self._select_change(self.session.next_change())

    def action_previous_change(self) -> None:
        self._select_change(self.session.previous_change())

    def action_open_file(self) -> None:
        """Prompt for a path and load it into the pane that last had focus."""
        side = self._last_side

        def load(path: Optional[str]) -> None:
            if path:
                self.load_path(side, path)

        self.app.push_screen(OpenFileScreen(PANE_LABELS[side]), callback=load)

    # File loading and watching

    def load_path(self, side: str, path: str) -> bool:
        """Read ``path`` into a pane; failures are reported as a notification."""
        result = safe_read_file(path)
        if not result.success:
            self.notify(result.error_message, severity="error", title="Open file")
            return False
        self.session.load(side, result.content)
        if self._paths.get(side) != path:
            self._paths[side] = path
            self._start_watcher(side)
        self._update_stats()
        return True

    def reload_side(self, side: str) -> None:
        path = self._paths.get(side)
        if path:
            log(f"[WATCHDOG] Reloading {side} pane from {path}")
            self.load_path(side, path)

    def _start_watcher(self, side: str) -> None:
        self._stop_watcher(side)
        path = self._paths.get(side)
        if not (self._watch_files and path):
            return

        def trigger_reload():
            self.app.call_from_thread(self.reload_side, side)

        try:
            _observer, stop = watch_file(path, trigger_reload, debounce_ms=self.session.debounce_ms)
        except (OSError, RuntimeError) as e:
            log_watchdog_error(path, "starting observer", e)
            return
        self._watch_stops[side] = stop

    def _stop_watcher(self, side: str) -> None:
        stop = self._watch_stops.pop(side, None)
        if stop is not None:
            stop()

    # Rendering

    def _show_result(self, result: Optional[DiffResult]) -> None:
        self._refresh_view()

    def _refresh_view(self) -> None:
        self._update_stats()
        self._render_table()

    def _update_stats(self) -> None:
        try:
            bar = self.query_one("#stats-bar", Static)
            bar.update(Text.from_markup(stats_markup(self.session.result, self.session.pending)))
        except Exception as e:
            log_ui_error("stats bar", "updating", e)

    def _render_table(self) -> None:
        indices = self.session.visible_indices()
        shown = self._table().show(self.session.result, indices, config.max_render_rows)
        if shown < len(indices):
            self.notify(
                f"Showing the first {shown} of {len(indices)} rows",
                severity="warning",
                title="Diff truncated",
            )

    def _refresh_toggles(self) -> None:
        self.query_one(Toolbar).update_toggles(self.session.live, self.session.changes_only)
        self._update_footer()

    def _select_change(self, row_index: int) -> None:
        if row_index == NO_SELECTION:
            self.notify("No changes to jump to", title="Diff")
            return
        if not self._table().select_row(row_index):
            log.debug(f"[UI] Change at row {row_index} is not rendered")
