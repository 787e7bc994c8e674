"""Two-way text sync between the owned pane state and the editing surfaces.

Inbound, a surface reports its full current text after every change.
Outbound, the owner pushes a full-text replacement (swap, clear, load).
Applying an outbound push must never come back as an inbound edit, so
reports made while a push is being applied, or that merely repeat the text
already owned, are recognised as echoes and dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Protocol

LEFT: Final[str] = "left"
RIGHT: Final[str] = "right"
SIDES: Final[tuple[str, str]] = (LEFT, RIGHT)

# (value, label) pairs for the syntax-mode selector; irrelevant to diffing
LANGUAGES: Final[tuple[tuple[str, str], ...]] = (
    ("text", "Plain text"),
    ("json", "JSON"),
    ("yaml", "YAML"),
    ("javascript", "JavaScript"),
    ("typescript", "TypeScript"),
    ("python", "Python"),
    ("markdown", "Markdown"),
    ("xml", "XML"),
    ("html", "HTML"),
)
LANGUAGE_VALUES: Final[frozenset[str]] = frozenset(value for value, _label in LANGUAGES)


@dataclass
class PaneState:
    """Content and syntax mode of one pane."""

    text: str = ""
    language: str = "text"


class EditingSurface(Protocol):
    """What an editor widget must offer to be driven by the synchronizer."""

    def set_text(self, text: str) -> None:
        """Replace the whole content programmatically."""
        ...


def check_side(side: str) -> str:
    if side not in SIDES:
        raise ValueError(f"side must be one of {SIDES}, got {side!r}")
    return side


class PaneSynchronizer:
    """Keeps ``panes`` authoritative while surfaces display and edit them."""

    def __init__(self, panes: dict[str, PaneState]):
        self._panes = panes
        self._surfaces: dict[str, EditingSurface] = {}
        self._pushing: set[str] = set()

    def attach(self, side: str, surface: EditingSurface) -> None:
        """Bind a surface to a side and bring it up to date."""
        self._surfaces[check_side(side)] = surface
        self._apply(side, self._panes[side].text)

    def detach(self, side: str) -> None:
        self._surfaces.pop(check_side(side), None)

    def on_surface_changed(self, side: str, text: str) -> bool:
        """Record a reported edit. Returns False when the report is an echo."""
        check_side(side)
        if side in self._pushing or text == self._panes[side].text:
            return False
        self._panes[side].text = text
        return True

    def push(self, side: str, text: str) -> None:
        """Make ``text`` the content of ``side`` and write it to the surface."""
        self._panes[check_side(side)].text = text
        self._apply(side, text)

    def _apply(self, side: str, text: str) -> None:
        surface = self._surfaces.get(side)
        if surface is None:
            return
        self._pushing.add(side)
        try:
            surface.set_text(text)
        finally:
            self._pushing.discard(side)
