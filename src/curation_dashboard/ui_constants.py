"""Internal UI constants for the CurationDashboard app."""

from __future__ import annotations

from textual.binding import Binding, BindingType

APP_CSS = """
Screen {
    background: $th-background;
}

Header {
    background: $th-surface-alt;
    color: $th-text;
}

#main-container {
    height: 1fr;
}

#list-pane {
    width: 3fr;
    min-width: 60;
    height: 100%;
    border: tall $th-row-border;
    background: $th-surface;
}

#list-pane:focus-within {
    border: tall $th-accent;
}

#detail-pane {
    width: 2fr;
    height: 100%;
    border: tall $th-row-border;
    background: $th-surface;
}

#detail-pane:focus-within {
    border: tall $th-accent;
}

#list-header {
    padding: 0 1;
    background: $th-surface;
    color: $th-accent;
    text-style: bold;
}

#details-header {
    padding: 0 1;
    background: $th-surface;
    color: $th-title;
    text-style: bold;
}

#item-scroll {
    height: 1fr;
    layers: base overlay;
    scrollbar-gutter: stable;
}

#item-list {
    height: auto;
}

#item-list,
#list-error,
#list-empty {
    layer: base;
}

#list-error {
    display: none;
    padding: 1 2;
    color: $th-error;
}

#list-error.visible {
    display: block;
}

#list-empty {
    display: none;
    padding: 1 2;
    color: $th-muted;
}

#list-empty.visible {
    display: block;
}

#details-scroll {
    height: 1fr;
}

VerticalScroll {
    scrollbar-background: $th-scrollbar-track;
    scrollbar-color: $th-scrollbar-thumb;
    scrollbar-color-hover: $th-scrollbar-hover;
    scrollbar-color-active: $th-scrollbar-active;
}

#status-bar {
    padding: 0 1;
    color: $th-muted;
}
"""

APP_BINDINGS: list[BindingType] = [
    Binding("q", "quit", "Quit", show=False),
    # Paging
    Binding("bracketleft", "prev_page", "Previous Page", show=False),
    Binding("bracketright", "next_page", "Next Page", show=False),
    Binding("r", "reload_page", "Reload", show=False),
    # Focused item
    Binding("enter", "open_item", "Open", show=False),
    Binding("o", "open_item", "Open", show=False),
    Binding("p", "publish_item", "Publish", show=False),
    Binding("c", "copy_summary", "Copy", show=False),
    # Inline editor
    Binding("escape", "cancel_edit", "Cancel Edit", show=False),
    # Publishing keys
    Binding("K", "edit_credentials", "Keys", show=False),
    # Theme cycling
    Binding("ctrl+t", "cycle_theme", "Theme", show=False),
    # Help overlay
    Binding("question_mark", "show_help", "Help (?)", show=False),
]

FOOTER_BINDINGS: list[tuple[str, str]] = [
    ("[ ]", "page"),
    ("o", "open"),
    ("p", "publish"),
    ("c", "copy"),
    ("K", "keys"),
    ("?", "help"),
    ("q", "quit"),
]

EDITOR_FOOTER_BINDINGS: list[tuple[str, str]] = [
    ("Esc", "discard"),
    ("click outside", "discard"),
]

__all__ = [
    "APP_BINDINGS",
    "APP_CSS",
    "EDITOR_FOOTER_BINDINGS",
    "FOOTER_BINDINGS",
]
