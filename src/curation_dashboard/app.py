"""Curation dashboard: page through backend items, edit summaries inline, publish.

Layout: the item list (with the inline editor popup overlaid on it) on the
left, the stored-summary detail pane on the right, and a page selector bar
under the list. Network work runs as tracked background tasks on one shared
httpx client; ordering is kept by the paginator's request tokens and the
editor's session tokens.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

import httpx
from rich.markup import escape
from textual import events, on
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import Button, Header, Input, Label, Static, TextArea

from curation_dashboard.cli import (
    _configure_color_mode,
    _configure_logging,
    _validate_interactive_tty,
)
from curation_dashboard.cli import main as _cli_main
from curation_dashboard.config import load_config, save_config
from curation_dashboard.editor import InlineEditor, RewriteKind
from curation_dashboard.models import Item, PageResult, UserConfig
from curation_dashboard.paginator import Paginator
from curation_dashboard.services.interfaces import AppServices, build_default_app_services
from curation_dashboard.themes import TEXTUAL_THEMES, resolve_theme_name
from curation_dashboard.ui_constants import (
    APP_BINDINGS,
    APP_CSS,
    EDITOR_FOOTER_BINDINGS,
    FOOTER_BINDINGS,
)
from curation_dashboard.widgets import (
    ContextFooter,
    InlineEditorPopup,
    ItemDetails,
    ItemRow,
    PageBar,
    SummaryCell,
)

logger = logging.getLogger(__name__)

EMPTY_PAGE_TEXT = (
    "[dim italic]No items on this page.[/]\n"
    "[dim]Try: press [bold][[/bold] to go back or [bold]r[/bold] to reload.[/]"
)


class CurationDashboard(App):
    """A TUI application to curate and publish backend content items."""

    TITLE = "Curation Dashboard"

    # Theme-aware CSS and key bindings are defined in ui_constants for maintainability.
    CSS = APP_CSS

    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        config: UserConfig | None = None,
        services: AppServices | None = None,
    ) -> None:
        super().__init__()
        # Register all Textual themes so $th-* CSS variables resolve before compose()
        for textual_theme in TEXTUAL_THEMES.values():
            self.register_theme(textual_theme)
        self._config = config or UserConfig()
        self._config.theme_name = resolve_theme_name(self._config.theme_name)
        self._services: AppServices = services or build_default_app_services()
        self._http_client: httpx.AsyncClient | None = None
        self._background_tasks: set[asyncio.Task[None]] = set()
        self._detail_request_token = 0
        self._list_lock = asyncio.Lock()
        self._paginator = Paginator(
            self._fetch_page,
            schedule=self._track_task,
            page_size=self._config.page_size,
            on_change=self._on_paginator_change,
        )
        self._editor = InlineEditor(
            commit=self._paginator.commit_summary,
            on_change=self._on_editor_change,
            on_rewrite_error=self._on_rewrite_error,
        )
        self._apply_theme()

    def _get_services(self) -> AppServices:
        """Return app service interfaces, lazily creating defaults for test doubles."""
        services = getattr(self, "_services", None)
        if services is None:
            services = build_default_app_services()
            self._services = services
        return services

    def _query_main(self, selector: Any, expect_type: Any = None) -> Any:
        """query_one against the main screen, even while a modal is on top."""
        stack = self.screen_stack
        if not stack:
            raise NoMatches(f"No nodes match {selector!r} before mount")
        return stack[0].query_one(selector, expect_type)

    def _request_kwargs(self) -> dict[str, Any]:
        """Connection arguments shared by every backend call."""
        return {
            "client": self._http_client,
            "base_url": self._config.base_url,
            "timeout_seconds": float(self._config.request_timeout),
        }

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-container"):
            with Vertical(id="list-pane"):
                yield Label(" Items", id="list-header")
                with VerticalScroll(id="item-scroll"):
                    yield Vertical(id="item-list")
                    yield Static("", id="list-error")
                    yield Static(EMPTY_PAGE_TEXT, id="list-empty")
                    yield InlineEditorPopup()
                yield PageBar()
                yield Label("", id="status-bar")
            with Vertical(id="detail-pane"):
                yield Label(" Summary", id="details-header")
                with VerticalScroll(id="details-scroll"):
                    yield ItemDetails()
        yield ContextFooter()

    def on_mount(self) -> None:
        """Create the shared client, load the first page and check publishing keys."""
        # Create shared HTTP client for connection pooling
        self._http_client = httpx.AsyncClient()

        # Warn if config was corrupt and defaults were used
        if self._config.config_defaulted:
            self.notify(
                "Config file was corrupt and has been backed up. Using defaults.",
                severity="warning",
                timeout=8,
            )

        self.sub_title = self._config.base_url
        self._paginator.load_page(0)
        self._update_footer()

        if not self._config.credentials.is_complete():
            self._prompt_credentials()

        logger.debug(
            "App mounted: base_url=%s, page_size=%d, theme=%s",
            self._config.base_url,
            self._config.page_size,
            self._config.theme_name,
        )

    async def on_unmount(self) -> None:
        """Cancel background work and close the shared HTTP client."""
        # Cancel tracked background tasks to avoid leaks during teardown.
        background_tasks = getattr(self, "_background_tasks", set())
        pending = [task for task in background_tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            _, still_pending = await asyncio.wait(pending, timeout=0.5)
            for task in still_pending:
                logger.debug("Background task did not cancel before shutdown: %r", task)
        background_tasks.clear()

        # Close shared HTTP client
        client = self._http_client
        self._http_client = None
        if client is not None:
            try:
                await client.aclose()
            except (httpx.HTTPError, OSError, RuntimeError) as e:
                logger.debug(
                    "Failed to close shared HTTP client during shutdown: %s", e, exc_info=True
                )

    # ========================================================================
    # Background tasks
    # ========================================================================

    def _track_task(self, coro: Any) -> asyncio.Task[None]:
        """Create an asyncio task and track it to prevent garbage collection."""
        task = asyncio.create_task(coro)
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        task.add_done_callback(self._on_task_done)
        return task

    @staticmethod
    def _on_task_done(task: asyncio.Task[None]) -> None:
        """Log unhandled exceptions from background tasks."""
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Unhandled exception in background task: %s", exc, exc_info=exc)

    # ========================================================================
    # Item list and paging
    # ========================================================================

    async def _fetch_page(self, page: int, limit: int) -> PageResult:
        return await self._get_services().items.fetch_page(
            page=page, limit=limit, **self._request_kwargs()
        )

    def _on_paginator_change(self) -> None:
        self._track_task(self._refresh_list())

    async def _refresh_list(self) -> None:
        """Render the paginator's current state: rows or error, page bar, status."""
        # Serialized so overlapping refreshes never mount duplicate row ids
        async with self._list_lock:
            try:
                item_list = self._query_main("#item-list", Vertical)
                error_label = self._query_main("#list-error", Static)
                empty_label = self._query_main("#list-empty", Static)
                page_bar = self._query_main(PageBar)
            except NoMatches:
                return
            paginator = self._paginator

            if paginator.error:
                error_label.update(escape(paginator.error))
            error_label.set_class(paginator.error is not None, "visible")
            item_list.display = paginator.error is None

            await self._sync_item_rows(item_list, paginator.items)
            empty_label.set_class(
                paginator.error is None and not paginator.loading and not paginator.items,
                "visible",
            )
            await page_bar.update_buttons(paginator.page_buttons())
            self._update_status_bar()

            if (
                len(self.screen_stack) == 1
                and self.focused is None
                and paginator.items
                and paginator.error is None
            ):
                self.screen.query(SummaryCell).first().focus()

    async def _sync_item_rows(self, item_list: Vertical, items: list[Item]) -> None:
        """Update rows in place when the id sequence is unchanged, else rebuild."""
        rows = list(item_list.query(ItemRow))
        if [row.item.id for row in rows] == [item.id for item in items]:
            for row, item in zip(rows, items):
                if row.item != item:
                    row.update_item(item)
            return
        await item_list.remove_children()
        if items:
            await item_list.mount_all([ItemRow(item) for item in items])
        self._query_main("#item-scroll", VerticalScroll).scroll_home(animate=False)

    def _update_status_bar(self) -> None:
        try:
            status_bar = self._query_main("#status-bar", Label)
        except NoMatches:
            return
        paginator = self._paginator
        parts = [f"Page {paginator.page + 1}", f"{len(paginator.items)} items"]
        if paginator.loading:
            parts.append("loading...")
        elif not paginator.has_more:
            parts.append("last page")
        status_bar.update(" · ".join(parts))

    def _change_page(self, page: int) -> bool:
        """Move to *page*; an open edit is discarded first."""
        self._editor.cancel()
        return self._paginator.go_to_page(page)

    def action_prev_page(self) -> None:
        if self._paginator.page == 0:
            return
        self._change_page(self._paginator.page - 1)

    def action_next_page(self) -> None:
        if self._paginator.loading:
            return
        if not self._paginator.has_more:
            self.notify("Already on the last page", title="Pages")
            return
        self._change_page(self._paginator.page + 1)

    def action_reload_page(self) -> None:
        self._change_page(self._paginator.page)

    def on_page_bar_go_to_page(self, message: PageBar.GoToPage) -> None:
        self._change_page(message.page)

    # ========================================================================
    # Inline editor
    # ========================================================================

    def _on_editor_change(self) -> None:
        from curation_dashboard.actions import editor_actions as _actions

        _actions.sync_popup(self)

    def _on_rewrite_error(self, kind: RewriteKind, exc: BaseException) -> None:
        from curation_dashboard.actions import editor_actions as _actions

        _actions.report_rewrite_error(self, kind, exc)

    async def on_event(self, event: events.Event) -> None:
        # Seen here before any widget so a press anywhere on the main screen counts
        if isinstance(event, events.MouseDown) and len(self.screen_stack) == 1:
            self._handle_pointer_down(event.screen_x, event.screen_y)
        await super().on_event(event)

    def _handle_pointer_down(self, x: int, y: int) -> None:
        from curation_dashboard.actions import editor_actions as _actions

        widget: Widget | None
        try:
            widget, _ = self.screen.get_widget_at(x, y)
        except NoMatches:
            widget = None
        _actions.handle_pointer_down(self, widget)

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        from curation_dashboard.actions import editor_actions as _actions

        if isinstance(event.text_area, SummaryCell):
            _actions.handle_summary_selection(self, event.text_area)

    @on(TextArea.Changed, "#popup-buffer")
    def on_popup_buffer_changed(self, event: TextArea.Changed) -> None:
        self._editor.set_buffer(event.text_area.text)

    @on(Input.Changed, "#popup-instruction")
    def on_popup_instruction_changed(self, event: Input.Changed) -> None:
        self._editor.set_instruction(event.value)

    def on_inline_editor_popup_action_requested(
        self, message: InlineEditorPopup.ActionRequested
    ) -> None:
        from curation_dashboard.actions import editor_actions as _actions

        _actions.run_popup_action(self, message.action)

    def action_cancel_edit(self) -> None:
        self._editor.cancel()

    # ========================================================================
    # Item actions
    # ========================================================================

    def _focused_item(self) -> Item | None:
        """Return the latest copy of the item whose row holds focus."""
        focused = self.focused
        return self._row_item(focused) if focused is not None else None

    def _row_item(self, widget: Widget) -> Item | None:
        node: Widget | None = widget
        while node is not None:
            if isinstance(node, ItemRow):
                return self._paginator.find(node.item.id)
            node = node.parent if isinstance(node.parent, Widget) else None
        return None

    @on(Button.Pressed, ".row-open")
    def on_row_open_pressed(self, event: Button.Pressed) -> None:
        item = self._row_item(event.button)
        if item is not None:
            self._open_item(item)

    @on(Button.Pressed, ".row-publish")
    def on_row_publish_pressed(self, event: Button.Pressed) -> None:
        item = self._row_item(event.button)
        if item is not None:
            self._request_publish(item.id, item.summary)

    def action_open_item(self) -> None:
        item = self._focused_item()
        if item is None:
            return
        self._open_item(item)

    def action_publish_item(self) -> None:
        item = self._focused_item()
        if item is None:
            self.notify("Focus an item first", title="Publish", severity="warning")
            return
        self._request_publish(item.id, item.summary)

    def action_copy_summary(self) -> None:
        from curation_dashboard.actions import item_actions as _actions

        _actions.copy_detail_summary(self)

    def _open_item(self, item: Item) -> None:
        from curation_dashboard.actions import item_actions as _actions

        _actions.open_item(self, item)

    def _request_publish(self, item_id: int, summary: str) -> bool:
        from curation_dashboard.actions import item_actions as _actions

        return _actions.request_publish(self, item_id, summary)

    # ========================================================================
    # Keys, theme, help
    # ========================================================================

    def _prompt_credentials(self) -> None:
        from curation_dashboard.actions import ui_actions as _actions

        _actions.prompt_credentials(self)

    def action_edit_credentials(self) -> None:
        self._prompt_credentials()

    def _save_config_or_warn(self, context: str) -> bool:
        """Save config and notify the user on failure.

        Returns True on success, False on failure.
        """
        if not save_config(self._config):
            self.notify(f"Failed to save {context}.", severity="warning")
            return False
        return True

    def _apply_theme(self) -> None:
        self.theme = self._config.theme_name

    def action_cycle_theme(self) -> None:
        from curation_dashboard.actions import ui_actions as _actions

        _actions.action_cycle_theme(self)

    def action_show_help(self) -> None:
        from curation_dashboard.actions import ui_actions as _actions

        _actions.action_show_help(self)

    def _update_footer(self) -> None:
        try:
            footer = self._query_main(ContextFooter)
        except NoMatches:
            return
        if self._editor.is_open:
            footer.render_bindings(EDITOR_FOOTER_BINDINGS, mode_badge="[bold]EDIT[/]")
        else:
            footer.render_bindings(FOOTER_BINDINGS)


def main() -> int:
    """Main entry point wrapper for CLI/bootstrap logic."""
    return _cli_main(
        load_config_fn=load_config,
        configure_logging_fn=_configure_logging,
        configure_color_mode_fn=_configure_color_mode,
        validate_interactive_tty_fn=_validate_interactive_tty,
        app_factory=CurationDashboard,
    )


if __name__ == "__main__":
    sys.exit(main())
