"""One editable side of the comparison: title, syntax-mode selector and editor.

The pane is the editing surface the session drives: it reports edits as
``TextArea.Changed`` messages and accepts full-text replacements through
``set_text``.
"""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Select, Static, TextArea

from split_diff.utils.error_handling import log_ui_error
from split_diff.utils.pane_sync import LANGUAGES

# Syntax-mode names that differ from Textual's highlighter names
_TEXTUAL_LANGUAGES = {
    "text": None,
    "typescript": "javascript",
}


class EditorPane(Vertical):
    """Editor for the left (original) or right (modified) text."""

    DEFAULT_CSS = """
    EditorPane {
        width: 1fr;
        height: 1fr;
    }
    EditorPane > .pane-header {
        height: 3;
        background: $panel;
        padding: 0 1;
    }
    EditorPane .pane-title {
        width: 1fr;
        content-align: left middle;
        height: 3;
        text-style: bold;
    }
    EditorPane Select {
        width: 24;
    }
    EditorPane TextArea {
        height: 1fr;
    }
    """

    def __init__(self, side: str, label: str, text: str = "", language: str = "text", **kwargs) -> None:
        super().__init__(**kwargs)
        self.side = side
        self.label = label
        self._initial_text = text
        self._language = language

    def compose(self) -> ComposeResult:
        with Horizontal(classes="pane-header"):
            yield Static(Text(self.label), classes="pane-title")
            yield Select(
                [(label, value) for value, label in LANGUAGES],
                value=self._language,
                allow_blank=False,
                id=f"lang-{self.side}",
            )
        yield TextArea(self._initial_text, show_line_numbers=True, id=f"editor-{self.side}")

    def on_mount(self) -> None:
        self.apply_language(self._language)

    @property
    def text_area(self) -> TextArea:
        return self.query_one(TextArea)

    def set_text(self, text: str) -> None:
        """Replace the editor content programmatically."""
        self.text_area.load_text(text)

    def set_language(self, language: str) -> None:
        """Show ``language`` in the selector and highlight accordingly."""
        self._language = language
        select = self.query_one(Select)
        if select.value != language:
            select.value = language
        self.apply_language(language)

    def apply_language(self, language: str) -> None:
        name = _TEXTUAL_LANGUAGES.get(language, language)
        try:
            self.text_area.language = name
        except Exception as e:
            # Highlighting needs Textual's optional syntax extras
            log_ui_error(f"{self.side} pane", f"setting language {language!r}", e)
            self.text_area.language = None
