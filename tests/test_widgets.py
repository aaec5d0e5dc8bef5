"""Focused tests for list rendering helpers and the popup widget."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from rich.text import Text
from textual.app import App, ComposeResult
from textual.widgets import Button

from curation_dashboard.models import Anchor, EditSession, PageButton
from curation_dashboard.paginator import build_page_buttons
from curation_dashboard.themes import TEXTUAL_THEMES
from curation_dashboard.widgets import ContextFooter, InlineEditorPopup, ItemRow, SummaryCell
from curation_dashboard.widgets.chrome import page_button_id
from curation_dashboard.widgets.listing import format_score, render_item_meta, truncate_text


def test_format_score_uses_one_decimal():
    assert format_score(7.25) == "7.2"
    assert format_score(8) == "8.0"


def test_truncate_text_keeps_short_titles():
    assert truncate_text("Short", 10) == "Short"
    assert truncate_text("A fairly long headline", 12) == "A fairly..."


def test_render_item_meta_escapes_markup_and_skips_empty_tags(make_item):
    item = make_item(source="[bold]Wire", tags="  ", score=9.04)

    meta = render_item_meta(item)
    plain = Text.from_markup(meta).plain

    assert plain.startswith("[bold]Wire")
    assert "score 9.0" in meta
    assert "italic" not in meta


@pytest.mark.parametrize(
    ("button", "expected"),
    [
        (PageButton("Previous", 0, kind="previous"), "page-prev"),
        (PageButton("Next", 2, kind="next"), "page-next"),
        (PageButton("4", None, current=True, kind="current"), "page-current"),
        (PageButton("2", 1), "page-jump-1"),
    ],
)
def test_page_button_ids(button, expected):
    assert page_button_id(button) == expected


def test_page_button_ids_are_unique_deep_in_the_list():
    ids = [page_button_id(button) for button in build_page_buttons(5, True)]

    assert ids == ["page-prev", "page-jump-0", "page-jump-1", "page-current", "page-next"]


def test_context_footer_renders_badge_and_bindings():
    footer = ContextFooter()
    footer.update = MagicMock()

    footer.render_bindings([("q", "quit"), ("?", "help")], mode_badge="EDIT")

    footer.update.assert_called_once_with("EDIT  [bold]q[/] quit  [bold]?[/] help")


class _PopupHarness(App):
    def __init__(self, item) -> None:
        super().__init__()
        for theme in TEXTUAL_THEMES.values():
            self.register_theme(theme)
        self.theme = "monokai"
        self._item = item
        self.actions: list[str] = []

    def compose(self) -> ComposeResult:
        yield ItemRow(self._item)
        yield InlineEditorPopup()

    def on_inline_editor_popup_action_requested(
        self, message: InlineEditorPopup.ActionRequested
    ) -> None:
        self.actions.append(message.action)


@pytest.mark.asyncio
async def test_popup_contains_only_its_own_descendants(make_item):
    app = _PopupHarness(make_item(item_id=3))

    async with app.run_test() as pilot:
        await pilot.pause()
        popup = app.query_one(InlineEditorPopup)

        assert popup.contains_widget(popup)
        assert popup.contains_widget(app.query_one("#popup-cancel", Button))
        assert not popup.contains_widget(app.query_one("#summary-3", SummaryCell))
        assert not popup.contains_widget(None)


@pytest.mark.asyncio
async def test_popup_busy_disables_rewrites_and_confirm(make_item):
    app = _PopupHarness(make_item(item_id=3))

    async with app.run_test() as pilot:
        await pilot.pause()
        popup = app.query_one(InlineEditorPopup)
        session = EditSession(token=1, item_id=3, buffer="Draft.", anchor=Anchor(2, 4), busy=True)

        popup.show_session(session)
        await pilot.pause()

        assert popup.has_class("visible")
        assert popup.has_class("busy")
        for action in ("shrink", "expand", "rewrite", "confirm"):
            assert app.query_one(f"#popup-{action}", Button).disabled is True
        assert app.query_one("#popup-publish", Button).disabled is False
        assert app.query_one("#popup-cancel", Button).disabled is False

        popup.hide()
        assert not popup.has_class("visible")
        assert not popup.has_class("busy")


@pytest.mark.asyncio
async def test_popup_button_posts_action(make_item):
    app = _PopupHarness(make_item(item_id=3))

    async with app.run_test() as pilot:
        await pilot.pause()
        app.query_one(InlineEditorPopup).add_class("visible")
        await pilot.pause()
        app.query_one("#popup-cancel", Button).press()
        await pilot.pause()

    assert app.actions == ["cancel"]


@pytest.mark.asyncio
async def test_item_row_update_reloads_changed_summary(make_item):
    app = _PopupHarness(make_item(item_id=3, summary="Old."))

    async with app.run_test() as pilot:
        await pilot.pause()
        row = app.query_one(ItemRow)

        row.update_item(make_item(item_id=3, summary="New."))
        await pilot.pause()

        assert row.item.summary == "New."
        assert app.query_one("#summary-3", SummaryCell).text == "New."
