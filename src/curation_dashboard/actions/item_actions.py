"""Row-level actions: open, detail summary, clipboard and publish."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from textual.css.query import NoMatches

from curation_dashboard.action_messages import (
    build_actionable_error,
    build_publish_confirmation_prompt,
    describe_request_failure,
)
from curation_dashboard.io_actions import copy_to_clipboard, open_in_browser
from curation_dashboard.models import Item
from curation_dashboard.modals import ConfirmModal
from curation_dashboard.posts import compose_post
from curation_dashboard.widgets import ItemDetails

if TYPE_CHECKING:
    from curation_dashboard.app import CurationDashboard

logger = logging.getLogger(__name__)


def open_item(app: "CurationDashboard", item: Item) -> None:
    """Open the item's link and load its stored summary into the detail pane."""
    if item.link and not open_in_browser(item.link):
        app.notify(
            build_actionable_error(
                "open your browser",
                why="the system browser command failed",
                next_step="copy the link from the item row instead",
            ),
            title="Browser",
            severity="error",
            timeout=8,
        )
    try:
        details = app._query_main(ItemDetails)
    except NoMatches:
        return
    app._detail_request_token += 1
    details.show_loading(item)
    app._track_task(load_item_summary(app, item, app._detail_request_token))


async def load_item_summary(app: "CurationDashboard", item: Item, token: int) -> None:
    """Fetch the stored summary; results for an older request are dropped."""
    try:
        summary = await app._get_services().items.fetch_item_summary(
            item_id=item.id, **app._request_kwargs()
        )
    except (httpx.HTTPError, OSError, ValueError) as exc:
        if token != app._detail_request_token:
            return
        logger.warning("Summary fetch for item %d failed: %s", item.id, exc, exc_info=True)
        message = build_actionable_error(
            "load the stored summary",
            why=describe_request_failure(exc),
            next_step="press Enter on the row to try again",
        )
        try:
            app._query_main(ItemDetails).show_error(item, message)
        except NoMatches:
            pass
        return

    if token != app._detail_request_token:
        logger.debug("Dropping stale summary for item %d", item.id)
        return
    try:
        app._query_main(ItemDetails).show_summary(item, summary)
    except NoMatches:
        return


def copy_detail_summary(app: "CurationDashboard") -> bool:
    """Copy the summary shown in the detail pane to the clipboard."""
    try:
        details = app._query_main(ItemDetails)
    except NoMatches:
        return False
    text = details.summary_text
    if not text:
        app.notify("Open an item first", title="Copy", severity="warning")
        return False
    if copy_to_clipboard(text):
        app.notify("Copied!", title="Copy")
        return True
    app.notify(
        build_actionable_error(
            "copy to clipboard",
            why="no clipboard tool (pbcopy, wl-copy, xclip, xsel or clip) worked",
            next_step="install xclip or xsel, or select the text in the terminal",
        ),
        title="Copy",
        severity="error",
        timeout=8,
    )
    return False


def request_publish(app: "CurationDashboard", item_id: int, summary: str) -> bool:
    """Show the composed post for confirmation, then publish it on accept."""
    item = app._paginator.find(item_id)
    if item is None:
        app.notify("That item is no longer on this page", title="Publish", severity="warning")
        return False
    content = compose_post(summary, item.tags, item.link)

    def on_confirm(confirmed: bool | None) -> None:
        if not confirmed:
            logger.debug("Publish of item %d cancelled", item_id)
            return
        app._track_task(publish(app, item_id, content))

    app.push_screen(ConfirmModal(build_publish_confirmation_prompt(content)), on_confirm)
    return True


async def publish(app: "CurationDashboard", item_id: int, content: str) -> bool:
    """Send one publish request and report the outcome. Never retries."""
    why: str | None = None
    try:
        success = await app._get_services().publish.publish_post(
            item_id=item_id, content=content, **app._request_kwargs()
        )
    except (httpx.HTTPError, OSError, ValueError) as exc:
        logger.warning("Publish of item %d failed: %s", item_id, exc, exc_info=True)
        success = False
        why = describe_request_failure(exc)
    if success:
        logger.info("Published item %d", item_id)
        app.notify("Post published", title="Publish")
        return True
    app.notify(
        build_actionable_error(
            "publish the post",
            why=why or "the backend reported the publish as unsuccessful",
            next_step="check the publishing keys (K) and try again",
        ),
        title="Publish",
        severity="error",
        timeout=8,
    )
    return False


__all__ = [
    "copy_detail_summary",
    "load_item_summary",
    "open_item",
    "publish",
    "request_publish",
]
