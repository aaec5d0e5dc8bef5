"""General-purpose modal dialogs: help overlay and confirmation."""

from __future__ import annotations

from rich.markup import escape
from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

# ============================================================================
# Help Overlay
# ============================================================================

HELP_SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Pages",
        [
            ("[ / ]", "Previous / next page"),
            ("r", "Reload current page"),
        ],
    ),
    (
        "Items",
        [
            ("select text", "Edit the summary inline"),
            ("Enter / o", "Open link and show stored summary"),
            ("p", "Publish focused item"),
            ("c", "Copy detail summary"),
        ],
    ),
    (
        "Inline editor",
        [
            ("Shrink / Expand", "Ask the backend for a shorter / longer text"),
            ("Rewrite", "Rewrite the text following the instruction"),
            ("Confirm", "Keep the edited text in the list"),
            ("Esc / click outside", "Discard the edit"),
        ],
    ),
    (
        "Other",
        [
            ("K", "Update publishing keys"),
            ("Ctrl+t", "Cycle theme"),
            ("?", "This help"),
            ("q", "Quit"),
        ],
    ),
]


class HelpScreen(ModalScreen[None]):
    """Help overlay listing the dashboard's shortcuts."""

    BINDINGS = [
        Binding("question_mark", "dismiss", "Close", show=False),
        Binding("escape", "dismiss", "Close"),
        Binding("q", "dismiss", "Close", show=False),
    ]

    CSS = """
    HelpScreen {
        align: center middle;
    }

    #help-dialog {
        width: 70%;
        height: 80%;
        min-width: 50;
        background: $th-background;
        border: tall $th-accent;
        padding: 0 2;
    }

    #help-title {
        text-style: bold;
        color: $th-title;
        margin-bottom: 1;
    }

    .help-section-title {
        text-style: bold;
        color: $th-accent;
    }

    .help-keys {
        padding-left: 2;
        margin-bottom: 1;
    }
    """

    def __init__(self, sections: list[tuple[str, list[tuple[str, str]]]] | None = None) -> None:
        super().__init__()
        self._sections = sections or HELP_SECTIONS

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="help-dialog"):
            yield Label("Keyboard Shortcuts", id="help-title")
            for section_name, entries in self._sections:
                if not entries:
                    continue
                yield Label(section_name, classes="help-section-title")
                lines = [f"[bold]{escape(key)}[/]  {desc}" for key, desc in entries]
                yield Static("\n".join(lines), classes="help-keys")

    def action_dismiss(self) -> None:
        self.dismiss(None)


# ============================================================================
# Confirm Modal
# ============================================================================


class ConfirmModal(ModalScreen[bool]):
    """Modal dialog showing the exact text an action will act on."""

    BINDINGS = [
        Binding("y", "confirm", "Confirm"),
        Binding("n", "cancel", "Cancel"),
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    ConfirmModal {
        align: center middle;
    }

    #confirm-dialog {
        width: 60%;
        min-width: 40;
        height: auto;
        max-height: 80%;
        background: $th-background;
        border: tall $th-confirm;
        padding: 0 2;
    }

    #confirm-scroll {
        height: auto;
        max-height: 20;
    }

    #confirm-message {
        color: $th-text;
        margin-bottom: 1;
    }

    #confirm-buttons {
        height: auto;
        align: right middle;
    }

    #confirm-buttons Button {
        margin-left: 1;
    }

    #confirm-footer {
        color: $th-muted;
        margin-top: 1;
    }
    """

    def __init__(self, message: str) -> None:
        super().__init__()
        self._message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            with VerticalScroll(id="confirm-scroll"):
                yield Static(escape(self._message), id="confirm-message")
            with Horizontal(id="confirm-buttons"):
                yield Button("Confirm (y)", variant="warning", id="confirm-yes")
                yield Button("Cancel (Esc)", variant="default", id="confirm-no")
            yield Static("Confirm: y  Cancel: n / Esc", id="confirm-footer")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)

    @on(Button.Pressed, "#confirm-yes")
    def on_yes_pressed(self) -> None:
        self.action_confirm()

    @on(Button.Pressed, "#confirm-no")
    def on_no_pressed(self) -> None:
        self.action_cancel()


__all__ = ["HELP_SECTIONS", "ConfirmModal", "HelpScreen"]
