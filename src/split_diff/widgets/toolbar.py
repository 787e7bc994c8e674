from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Button


class Toolbar(Horizontal):
    """Row of action buttons between the editors and the diff."""

    DEFAULT_CSS = """
    Toolbar {
        height: 3;
        background: $surface-darken-1;
        padding: 0 1;
    }
    Toolbar Button {
        margin: 0 1 0 0;
        min-width: 10;
    }
    """

    def __init__(self, live: bool = True, changes_only: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self._live = live
        self._changes_only = changes_only

    def compose(self) -> ComposeResult:
        yield Button("Compare", id="compare_button", variant="primary")
        yield Button("Swap ⇄", id="swap_button")
        yield Button("Clear", id="clear_button")
        yield Button(self._live_label(), id="live_button")
        yield Button(self._changes_label(), id="changes_button")
        yield Button("Next change", id="next_change_button")

    def _live_label(self) -> str:
        return f"Live: {'ON' if self._live else 'OFF'}"

    def _changes_label(self) -> str:
        return f"Changes only: {'ON' if self._changes_only else 'OFF'}"

    def update_toggles(self, live: bool, changes_only: bool) -> None:
        """Refresh the toggle button labels."""
        self._live = live
        self._changes_only = changes_only
        self.query_one("#live_button", Button).label = self._live_label()
        self.query_one("#changes_button", Button).label = self._changes_label()
