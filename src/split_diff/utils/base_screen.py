"""Base screen classes shared by Split Diff screens.

This module standardizes the composition every screen follows:
Header + main content + Footer.
"""

from textual.app import ComposeResult
from textual.screen import Screen

from split_diff.utils.logger import log
from split_diff.widgets.footer import Footer
from split_diff.widgets.header import Header


class BaseScreen(Screen):
    """Base class for all Split Diff screens.

    Subclasses implement compose_main_content() and get_footer_text(); the
    header and footer are added here.
    """

    def __init__(self, page_name: str):
        """Initialize base screen with page name.

        Args:
            page_name: Name to display in header and title
        """
        super().__init__()
        self.page_name = page_name
        self.title = f"Split Diff — {page_name}"

    def compose(self) -> ComposeResult:
        """Standard composition: header + main content + footer."""
        yield Header(page_name=self.page_name, show_clock=True)
        yield from self.compose_main_content()
        yield Footer(text=self.get_footer_text())

    def compose_main_content(self) -> ComposeResult:
        """Define the main content area for this screen."""
        raise NotImplementedError("Subclasses must implement compose_main_content()")

    def get_footer_text(self) -> str:
        """Get footer text for this screen."""
        raise NotImplementedError("Subclasses must implement get_footer_text()")

    def _update_footer(self) -> None:
        """Re-render the footer from get_footer_text()."""
        try:
            self.query_one(Footer).set_text(self.get_footer_text())
        except Exception as e:
            log.error(f"Failed to update footer: {e}")

    def action_go_back(self):
        """Standard back navigation action."""
        try:
            self.app.pop_screen()
        except (AttributeError, RuntimeError) as e:
            log.error(f"Failed to go back: {e}")

    async def on_mount(self):
        """Set screen title; subclasses should call super().on_mount()."""
        self.title = f"Split Diff — {self.page_name}"
