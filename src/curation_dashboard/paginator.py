"""Page state for the item list: current index, item set, and fetch lifecycle.

Every page change bumps a request token before the fetch is scheduled, so
a response that arrives after the operator has moved on is recognised as
stale and dropped instead of overwriting the newer page.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

import httpx

from curation_dashboard.action_messages import build_fetch_error_message
from curation_dashboard.models import DEFAULT_PAGE_SIZE, Item, PageButton, PageResult

logger = logging.getLogger(__name__)

FetchPage = Callable[[int, int], Awaitable[PageResult]]
Scheduler = Callable[[Coroutine[Any, Any, None]], Any]


def build_page_buttons(page: int, has_more: bool) -> list[PageButton]:
    """Return the page selector entries for the current position.

    Shortcuts to pages 1 and 2 only appear once they have scrolled out of
    the immediate vicinity of the current page.
    """
    buttons = [PageButton("Previous", page - 1, disabled=page == 0, kind="previous")]
    if page > 2:
        buttons.append(PageButton("1", 0))
    if page > 1:
        buttons.append(PageButton("2", 1))
    buttons.append(PageButton(str(page + 1), None, current=True, kind="current"))
    buttons.append(PageButton("Next", page + 1, disabled=not has_more, kind="next"))
    return buttons


class Paginator:
    """Owns the current page index, its items, the has-more flag and errors."""

    def __init__(
        self,
        fetch: FetchPage,
        *,
        schedule: Scheduler,
        page_size: int = DEFAULT_PAGE_SIZE,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._fetch = fetch
        self._schedule = schedule
        self._on_change = on_change
        self.page_size = page_size
        self.page = 0
        self.items: list[Item] = []
        self.has_more = True
        self.error: str | None = None
        self.loading = False
        self._request_token = 0

    def load_page(self, page: int) -> bool:
        """Request page *page*; returns False when the index is invalid."""
        if page < 0:
            return False
        self.page = page
        self._request_token += 1
        self.loading = True
        self._schedule(self._fetch_into(self._request_token, page))
        self._notify()
        return True

    def go_to_page(self, page: int) -> bool:
        return self.load_page(page)

    def next_page(self) -> bool:
        """Advance one page; refused while the current page is still loading."""
        if self.loading or not self.has_more:
            return False
        return self.load_page(self.page + 1)

    def previous_page(self) -> bool:
        if self.page == 0:
            return False
        return self.load_page(self.page - 1)

    def reload(self) -> bool:
        return self.load_page(self.page)

    def page_buttons(self) -> list[PageButton]:
        # has_more is only known once the current page has answered
        return build_page_buttons(self.page, self.has_more and not self.loading)

    async def _fetch_into(self, token: int, page: int) -> None:
        try:
            result = await self._fetch(page, self.page_size)
        except (httpx.HTTPError, OSError, ValueError) as exc:
            if token != self._request_token:
                logger.debug("Dropping stale failure for page %d", page)
                return
            logger.warning("Page %d fetch failed: %s", page, exc, exc_info=True)
            self.error = build_fetch_error_message(page, exc)
            self.loading = False
            self._notify()
            return

        if token != self._request_token:
            logger.debug("Dropping stale result for page %d", page)
            return

        self.items = list(result.items)
        self.has_more = result.has_more
        self.error = None
        self.loading = False
        logger.debug("Loaded page %d: %d items, has_more=%s", page, len(self.items), self.has_more)
        self._notify()

    def find(self, item_id: int) -> Item | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def commit_summary(self, item_id: int, summary: str) -> bool:
        """Write *summary* into the matching item; False if it left the page."""
        for index, item in enumerate(self.items):
            if item.id == item_id:
                self.items[index] = dataclasses.replace(item, summary=summary)
                self._notify()
                return True
        logger.debug("Commit for item %d dropped: not on page %d", item_id, self.page)
        return False

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()


__all__ = [
    "FetchPage",
    "Paginator",
    "Scheduler",
    "build_page_buttons",
]
