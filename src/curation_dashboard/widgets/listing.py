"""Item rows for the dashboard list."""

from __future__ import annotations

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Label, TextArea

from curation_dashboard.models import Item

TITLE_MAX_LEN = 80


def format_score(score: float) -> str:
    return f"{score:.1f}"


def truncate_text(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3].rstrip() + "..."


def render_item_meta(item: Item) -> str:
    """Build the one-line meta row: source, time, tags and score."""
    parts = [f"[bold]{escape(item.source)}[/]", f"[dim]{escape(item.time)}[/]"]
    if item.tags.strip():
        parts.append(f"[italic]{escape(item.tags)}[/]")
    parts.append(f"score {format_score(item.score)}")
    return "  ·  ".join(parts)


class SummaryCell(TextArea):
    """Read-only summary text that the operator can select from."""

    DEFAULT_CSS = """
    SummaryCell {
        height: auto;
        max-height: 12;
        border: none;
        padding: 0 1;
        background: $th-surface;
    }

    SummaryCell:focus {
        border-left: tall $th-accent;
    }
    """

    def __init__(self, item: Item) -> None:
        super().__init__(
            item.summary,
            read_only=True,
            soft_wrap=True,
            show_line_numbers=False,
            id=f"summary-{item.id}",
            classes="summary-cell",
        )
        self.item_id = item.id


def selection_viewport_rect(text_area: TextArea) -> tuple[int, int]:
    """Return (bottom, left) of the current selection in screen cells.

    Rows and columns are taken from the document; soft-wrapped lines make
    this an approximation of where the highlighted text sits.
    """
    selection = text_area.selection
    (start_row, start_col), (end_row, end_col) = sorted((selection.start, selection.end))
    region = text_area.content_region
    scroll = text_area.scroll_offset
    bottom = region.y + end_row + 1 - scroll.y
    left = region.x + (min(start_col, end_col) if start_row == end_row else 0) - scroll.x
    return bottom, left


class ItemRow(Vertical):
    """One item: title line, meta line, summary cell and row actions."""

    DEFAULT_CSS = """
    ItemRow {
        height: auto;
        padding: 0 1;
        margin-bottom: 1;
        border-left: tall $th-row-border;
    }

    ItemRow:focus-within {
        border-left: tall $th-accent;
    }

    ItemRow .item-title {
        text-style: bold;
        color: $th-title;
    }

    ItemRow .item-meta {
        color: $th-muted;
    }

    ItemRow .item-actions {
        height: auto;
        align: right middle;
    }

    ItemRow .item-actions Button {
        min-width: 10;
        margin-left: 1;
    }
    """

    def __init__(self, item: Item) -> None:
        super().__init__(id=f"item-{item.id}", classes="item-row")
        self.item = item

    def compose(self) -> ComposeResult:
        yield Label(escape(truncate_text(self.item.title, TITLE_MAX_LEN)), classes="item-title")
        yield Label(render_item_meta(self.item), classes="item-meta")
        yield SummaryCell(self.item)
        with Horizontal(classes="item-actions"):
            yield Button("Open", id=f"open-{self.item.id}", classes="row-open")
            yield Button(
                "Publish",
                variant="primary",
                id=f"publish-{self.item.id}",
                classes="row-publish",
            )

    def update_item(self, item: Item) -> None:
        """Swap in a newer copy of the same item, reloading the summary if it changed."""
        self.item = item
        cell = self.query_one(SummaryCell)
        if cell.text != item.summary:
            cell.load_text(item.summary)


__all__ = [
    "TITLE_MAX_LEN",
    "ItemRow",
    "SummaryCell",
    "format_score",
    "render_item_meta",
    "selection_viewport_rect",
    "truncate_text",
]
