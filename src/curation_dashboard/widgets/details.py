"""Detail pane showing the stored summary of the last opened item."""

from __future__ import annotations

from rich.markup import escape
from textual.widgets import Static

from curation_dashboard.models import Item

EMPTY_DETAILS_TEXT = "[dim italic]Open an item (Enter) to view its summary.[/]"


class ItemDetails(Static):
    """Summary panel; its plain text is what the copy action puts on the clipboard."""

    DEFAULT_CSS = """
    ItemDetails {
        padding: 0 1;
    }
    """

    def __init__(self) -> None:
        super().__init__(EMPTY_DETAILS_TEXT, id="item-details")
        self.item_id: int | None = None
        self.summary_text: str | None = None

    def show_loading(self, item: Item) -> None:
        self.item_id = item.id
        self.summary_text = None
        self.update(f"[bold]{escape(item.title)}[/]\n\n[dim italic]Loading summary...[/]")

    def show_summary(self, item: Item, summary: str) -> None:
        self.item_id = item.id
        self.summary_text = summary
        self.update(f"[bold]{escape(item.title)}[/]\n\n{escape(summary)}")

    def show_error(self, item: Item, message: str) -> None:
        self.item_id = item.id
        self.summary_text = None
        self.update(f"[bold]{escape(item.title)}[/]\n\n[red]{escape(message)}[/]")


__all__ = ["EMPTY_DETAILS_TEXT", "ItemDetails"]
