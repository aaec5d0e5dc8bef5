"""Widget chrome: page selector bar and footer hints."""

from __future__ import annotations

from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, Static

from curation_dashboard.models import PageButton


def page_button_id(button: PageButton) -> str:
    if button.kind == "previous":
        return "page-prev"
    if button.kind == "next":
        return "page-next"
    if button.current:
        return "page-current"
    return f"page-jump-{button.target}"


class ContextFooter(Static):
    """Footer showing the key bindings relevant to the current mode."""

    DEFAULT_CSS = """
    ContextFooter {
        dock: bottom;
        height: 1;
        background: $th-background;
        color: $th-muted;
        padding: 0 1;
        border-top: solid $th-surface-alt;
    }
    """

    def render_bindings(self, bindings: list[tuple[str, str]], mode_badge: str = "") -> None:
        """Update the footer with a list of (key, label) binding hints."""
        parts = [mode_badge] if mode_badge else []
        for key, label in bindings:
            parts.append(f"[bold]{key}[/] {label}")
        self.update("  ".join(parts))


class PageBar(Horizontal):
    """Previous / shortcut / current / Next buttons for the item list."""

    class GoToPage(Message):
        """Request to jump to a zero-based page index."""

        def __init__(self, page: int) -> None:
            super().__init__()
            self.page = page

    DEFAULT_CSS = """
    PageBar {
        height: auto;
        padding: 0 1;
        background: $th-surface;
        align: center middle;
    }

    PageBar Button {
        min-width: 6;
        margin-right: 1;
    }

    PageBar Button.current {
        background: $th-current-page;
        color: $th-current-page-text;
        text-style: bold;
    }
    """

    def __init__(self) -> None:
        super().__init__(id="page-bar")
        self._targets: dict[str, int] = {}

    async def update_buttons(self, buttons: list[PageButton]) -> None:
        """Replace the bar's buttons with *buttons*."""
        await self.remove_children()
        self._targets = {}
        widgets = []
        for entry in buttons:
            button_id = page_button_id(entry)
            if entry.target is not None and not entry.current:
                self._targets[button_id] = entry.target
            widgets.append(
                Button(
                    entry.label,
                    id=button_id,
                    disabled=entry.disabled,
                    classes="current" if entry.current else "",
                )
            )
        await self.mount_all(widgets)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        target = self._targets.get(event.button.id or "")
        if target is not None:
            self.post_message(self.GoToPage(target))


__all__ = ["ContextFooter", "PageBar", "page_button_id"]
