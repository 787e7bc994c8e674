from rich.text import Text
from textual.widgets import Static


class Footer(Static):
    """A simple footer widget for displaying contextual text and keybindings."""

    DEFAULT_CSS = """
    Footer {
        dock: bottom;
        height: 1;
        background: $panel-darken-2;
        color: $text-muted;
    }
    """

    def __init__(self, text: str | None = None, classes: str = "footer") -> None:
        self.footer_text = text if text is not None else " [orange1]Ctrl+Q[/orange1] Quit"
        super().__init__(Text.from_markup(self.footer_text), classes=classes)

    def set_text(self, text: str) -> None:
        """Replace the footer markup."""
        self.footer_text = text
        self.update(Text.from_markup(text))
