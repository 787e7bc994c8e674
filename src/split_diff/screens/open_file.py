"""Modal prompt asking for a file path to load into one pane."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Static

from split_diff.utils.error_handling import log_validation_error
from split_diff.utils.validation import ValidationError, validate_file_path


class OpenFileScreen(ModalScreen[str | None]):
    """Ask for a path; dismisses with the validated absolute path, or None on Escape."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    DEFAULT_CSS = """
    OpenFileScreen {
        align: center middle;
    }
    #open-file-dialog {
        width: 70;
        height: auto;
        padding: 1 2;
        border: heavy $primary;
        background: $surface;
    }
    #open-file-error {
        color: $error;
        height: auto;
    }
    """

    def __init__(self, pane_label: str) -> None:
        super().__init__()
        self.pane_label = pane_label

    def compose(self) -> ComposeResult:
        with Vertical(id="open-file-dialog"):
            yield Static(f"Open file into [b]{self.pane_label}[/b] pane", markup=True)
            yield Input(placeholder="path/to/file.txt", id="open-file-input")
            yield Static("", id="open-file-error")

    def on_mount(self) -> None:
        self.query_one(Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        try:
            path = validate_file_path(event.value, "File")
        except ValidationError as e:
            log_validation_error("file path", event.value, e)
            self.query_one("#open-file-error", Static).update(Text(str(e)))
            return
        self.dismiss(path)

    def action_cancel(self) -> None:
        self.dismiss(None)
