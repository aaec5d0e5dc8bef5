"""Inline editor wiring: selection capture, pointer handling and popup actions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import TextArea

from curation_dashboard.action_messages import build_rewrite_error_message
from curation_dashboard.editor import RewriteCall, RewriteKind, anchor_from_selection
from curation_dashboard.models import Anchor
from curation_dashboard.widgets import InlineEditorPopup, SummaryCell, selection_viewport_rect

if TYPE_CHECKING:
    from curation_dashboard.app import CurationDashboard

logger = logging.getLogger(__name__)

POPUP_WIDTH = 72

REWRITE_KINDS: dict[str, RewriteKind] = {
    "shrink": RewriteKind.SHRINK,
    "expand": RewriteKind.EXPAND,
    "rewrite": RewriteKind.INSTRUCT,
}


def compute_popup_anchor(text_area: TextArea, scroll: VerticalScroll) -> Anchor:
    """Place the popup just below the selection, in the scroll container's content space."""
    bottom, left = selection_viewport_rect(text_area)
    region = scroll.content_region
    anchor = anchor_from_selection(
        bottom - region.y,
        left - region.x,
        scroll_x=round(scroll.scroll_x),
        scroll_y=round(scroll.scroll_y),
    )
    max_left = max(0, region.width - POPUP_WIDTH)
    return Anchor(top=max(0, anchor.top), left=max(0, min(anchor.left, max_left)))


def handle_summary_selection(app: "CurationDashboard", cell: SummaryCell) -> bool:
    """Open the editor for a non-empty selection inside a summary cell."""
    selected = cell.selected_text
    if not selected:
        return False
    item = app._paginator.find(cell.item_id)
    if item is None:
        logger.debug("Selection in item %d ignored: not on current page", cell.item_id)
        return False
    try:
        scroll = app._query_main("#item-scroll", VerticalScroll)
    except NoMatches:
        return False
    return app._editor.open(item, selected, compute_popup_anchor(cell, scroll))


def handle_pointer_down(app: "CurationDashboard", widget: Widget | None) -> bool:
    """Close the editor when the pointer goes down anywhere outside the popup."""
    if not app._editor.is_open:
        return False
    try:
        popup = app._query_main(InlineEditorPopup)
    except NoMatches:
        return False
    return app._editor.pointer_down(inside_popup=popup.contains_widget(widget))


def build_rewrite_call(app: "CurationDashboard", kind: RewriteKind, item_id: int) -> RewriteCall:
    """Bind one rewrite endpoint to the current client and the session's item."""
    services = app._get_services()

    async def call(buffer: str, instruction: str) -> str:
        kwargs = app._request_kwargs()
        if kind is RewriteKind.SHRINK:
            return await services.rewrite.shrink_summary(item_id=item_id, summary=buffer, **kwargs)
        if kind is RewriteKind.EXPAND:
            return await services.rewrite.expand_summary(
                summary=buffer,
                expansion=app._config.expansion_amount,
                **kwargs,
            )
        return await services.rewrite.rewrite_summary(
            item_id=item_id,
            summary=buffer,
            instruction=instruction.strip(),
            **kwargs,
        )

    return call


def start_rewrite(app: "CurationDashboard", kind: RewriteKind) -> bool:
    """Schedule one rewrite request for the open session."""
    session = app._editor.session
    if session is None:
        return False
    if session.busy:
        app.notify("A request is already running for this edit", title="Editor")
        return False
    if kind is RewriteKind.INSTRUCT and not session.instruction.strip():
        app.notify("Type an instruction first", title="Editor", severity="warning")
        return False
    app._track_task(app._editor.rewrite(kind, build_rewrite_call(app, kind, session.item_id)))
    return True


def run_popup_action(app: "CurationDashboard", action: str) -> None:
    """Route a popup button press to the editor."""
    if action in REWRITE_KINDS:
        start_rewrite(app, REWRITE_KINDS[action])
    elif action == "confirm":
        app._editor.confirm()
    elif action == "publish":
        session = app._editor.session
        if session is not None:
            app._request_publish(session.item_id, session.buffer)
    elif action == "cancel":
        app._editor.cancel()


def report_rewrite_error(app: "CurationDashboard", kind: RewriteKind, exc: BaseException) -> None:
    app.notify(
        build_rewrite_error_message(kind.value, exc),
        title="Editor",
        severity="error",
        timeout=8,
    )


def sync_popup(app: "CurationDashboard") -> None:
    """Mirror the editor session into the popup widget."""
    try:
        popup = app._query_main(InlineEditorPopup)
    except NoMatches:
        return
    session = app._editor.session
    if session is None:
        popup.hide()
    else:
        popup.show_session(session)
    app._update_footer()


__all__ = [
    "POPUP_WIDTH",
    "REWRITE_KINDS",
    "build_rewrite_call",
    "compute_popup_anchor",
    "handle_pointer_down",
    "handle_summary_selection",
    "report_rewrite_error",
    "run_popup_action",
    "start_rewrite",
    "sync_popup",
]
