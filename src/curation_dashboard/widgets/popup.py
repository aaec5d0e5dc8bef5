"""Anchored popup that edits a working copy of one item's summary."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Input, Label, TextArea

from curation_dashboard.models import EditSession

POPUP_ACTIONS = ("shrink", "expand", "rewrite", "confirm", "publish", "cancel")
REWRITE_ACTIONS = frozenset({"shrink", "expand", "rewrite"})


class InlineEditorPopup(Vertical):
    """Overlay editor positioned at the selection anchor."""

    class ActionRequested(Message):
        """One of the popup's buttons was pressed."""

        def __init__(self, action: str) -> None:
            super().__init__()
            self.action = action

    DEFAULT_CSS = """
    InlineEditorPopup {
        layer: overlay;
        position: absolute;
        display: none;
        width: 72;
        height: auto;
        background: $th-background;
        border: tall $th-title;
        padding: 0 1;
    }

    InlineEditorPopup.visible {
        display: block;
    }

    InlineEditorPopup.busy {
        border: tall $th-busy;
    }

    #popup-title {
        text-style: bold;
        color: $th-title;
    }

    #popup-buffer {
        height: 8;
        background: $th-surface;
    }

    #popup-instruction {
        background: $th-surface;
        border: none;
    }

    #popup-buttons {
        height: auto;
        align: right middle;
    }

    #popup-buttons Button {
        min-width: 9;
        margin-left: 1;
    }

    #popup-status {
        color: $th-muted;
    }
    """

    def __init__(self) -> None:
        super().__init__(id="inline-editor")

    def compose(self) -> ComposeResult:
        yield Label("", id="popup-title")
        yield TextArea("", id="popup-buffer", soft_wrap=True)
        yield Input(placeholder="Instruction for rewrite...", id="popup-instruction")
        with Horizontal(id="popup-buttons"):
            yield Button("Shrink", id="popup-shrink")
            yield Button("Expand", id="popup-expand")
            yield Button("Rewrite", id="popup-rewrite")
            yield Button("Confirm", variant="success", id="popup-confirm")
            yield Button("Publish", variant="primary", id="popup-publish")
            yield Button("Cancel", id="popup-cancel")
        yield Label("", id="popup-status")

    def show_session(self, session: EditSession) -> None:
        """Position the popup at the session anchor and load its buffer."""
        self.styles.offset = (session.anchor.left, session.anchor.top)
        self.query_one("#popup-title", Label).update(f"Editing item {session.item_id}")
        buffer = self.query_one("#popup-buffer", TextArea)
        if buffer.text != session.buffer:
            buffer.load_text(session.buffer)
        instruction = self.query_one("#popup-instruction", Input)
        if instruction.value != session.instruction:
            instruction.value = session.instruction
        self.set_busy(session.busy)
        self.add_class("visible")

    def hide(self) -> None:
        self.remove_class("visible")
        self.remove_class("busy")

    def set_busy(self, busy: bool) -> None:
        for action in REWRITE_ACTIONS:
            self.query_one(f"#popup-{action}", Button).disabled = busy
        self.query_one("#popup-confirm", Button).disabled = busy
        self.query_one("#popup-buffer", TextArea).read_only = busy
        self.query_one("#popup-status", Label).update("Working..." if busy else "")
        self.set_class(busy, "busy")

    def contains_widget(self, widget: Widget | None) -> bool:
        """Return True when *widget* is the popup or one of its descendants."""
        node = widget
        while node is not None:
            if node is self:
                return True
            node = node.parent if isinstance(node.parent, Widget) else None
        return False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        action = button_id.removeprefix("popup-")
        if action in POPUP_ACTIONS:
            event.stop()
            self.post_message(self.ActionRequested(action))


__all__ = ["POPUP_ACTIONS", "REWRITE_ACTIONS", "InlineEditorPopup"]
