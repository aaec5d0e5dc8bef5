"""Shared test fixtures for curation dashboard tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from curation_dashboard.models import Item, PageResult, TwitterCredentials, UserConfig
from curation_dashboard.services.interfaces import AppServices

# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_item():
    """Factory fixture for creating Item instances with sensible defaults."""

    def _make(
        item_id: int = 1,
        source: str = "Example Times",
        title: str = "Test headline",
        time: str = "2024-01-15 09:30",
        tags: str = "ai, policy",
        link: str | None = None,
        score: float = 7.25,
        summary: str = "Original summary.",
    ) -> Item:
        if link is None:
            link = f"https://example.com/items/{item_id}"
        return Item(
            id=item_id,
            source=source,
            title=title,
            time=time,
            tags=tags,
            link=link,
            score=score,
            summary=summary,
        )

    return _make


@pytest.fixture
def make_page(make_item):
    """Factory fixture for a PageResult holding items with consecutive ids."""

    def _make(first_id: int = 1, count: int = 3, has_more: bool = True) -> PageResult:
        items = [
            make_item(item_id=item_id, summary=f"Summary {item_id}.")
            for item_id in range(first_id, first_id + count)
        ]
        return PageResult(items=items, has_more=has_more)

    return _make


@pytest.fixture
def sample_config():
    """Factory fixture for creating UserConfig with optional overrides."""

    def _make(**kwargs: Any) -> UserConfig:
        return UserConfig(**kwargs)

    return _make


@pytest.fixture
def complete_credentials() -> TwitterCredentials:
    return TwitterCredentials(
        api_key="key",
        api_secret="secret",
        bearer_token="bearer",
        access_token="token",
        access_token_secret="token-secret",
    )


@pytest.fixture
def fake_services():
    """AppServices with every backend call replaced by an AsyncMock."""

    def _make(page: PageResult | None = None) -> AppServices:
        items = AsyncMock()
        items.fetch_page = AsyncMock(return_value=page or PageResult())
        items.fetch_item_summary = AsyncMock(return_value="Stored summary.")
        rewrite = AsyncMock()
        rewrite.shrink_summary = AsyncMock(return_value="Short.")
        rewrite.expand_summary = AsyncMock(return_value="Much longer text.")
        rewrite.rewrite_summary = AsyncMock(return_value="Rewritten.")
        publish = AsyncMock()
        publish.publish_post = AsyncMock(return_value=True)
        publish.submit_credentials = AsyncMock(return_value=None)
        return AppServices(items=items, rewrite=rewrite, publish=publish)

    return _make


@pytest.fixture(autouse=True)
def _isolate_config_dir(tmp_path, monkeypatch):
    """Point platformdirs-based config paths at a temp directory."""
    monkeypatch.setattr(
        "curation_dashboard.config.user_config_dir", lambda *_args, **_kwargs: str(tmp_path)
    )
    yield
