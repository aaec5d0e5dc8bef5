"""Service interfaces + default adapters for app-level dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import httpx

from curation_dashboard.models import PageResult, TwitterCredentials
from curation_dashboard.services import backend_service as _backend


@runtime_checkable
class ItemsService(Protocol):
    """Interface for reading items from the backend."""

    async def fetch_page(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        page: int,
        limit: int,
        timeout_seconds: float,
    ) -> PageResult:
        """Fetch one page of items."""
        ...

    async def fetch_item_summary(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        item_id: int,
        timeout_seconds: float,
    ) -> str:
        """Fetch the stored summary for one item."""
        ...


@runtime_checkable
class RewriteService(Protocol):
    """Interface for the shrink / expand / instruction rewrite calls."""

    async def shrink_summary(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        item_id: int,
        summary: str,
        timeout_seconds: float,
    ) -> str:
        """Return a shorter summary."""
        ...

    async def expand_summary(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        summary: str,
        expansion: int,
        timeout_seconds: float,
    ) -> str:
        """Return a longer summary."""
        ...

    async def rewrite_summary(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        item_id: int,
        summary: str,
        instruction: str,
        timeout_seconds: float,
    ) -> str:
        """Return the summary rewritten per the instruction."""
        ...


@runtime_checkable
class PublishService(Protocol):
    """Interface for publishing and credential hand-off."""

    async def publish_post(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        item_id: int,
        content: str,
        timeout_seconds: float,
    ) -> bool:
        """Publish a post and return the backend's success flag."""
        ...

    async def submit_credentials(
        self,
        *,
        client: httpx.AsyncClient | None,
        base_url: str,
        credentials: TwitterCredentials,
        timeout_seconds: float,
    ) -> None:
        """Send publishing credentials to the backend."""
        ...


class DefaultItemsService:
    """Default adapter that delegates to function-based backend calls."""

    async def fetch_page(self, **kwargs) -> PageResult:
        return await _backend.fetch_page(**kwargs)

    async def fetch_item_summary(self, **kwargs) -> str:
        return await _backend.fetch_item_summary(**kwargs)


class DefaultRewriteService:
    """Default adapter that delegates to function-based backend calls."""

    async def shrink_summary(self, **kwargs) -> str:
        return await _backend.shrink_summary(**kwargs)

    async def expand_summary(self, **kwargs) -> str:
        return await _backend.expand_summary(**kwargs)

    async def rewrite_summary(self, **kwargs) -> str:
        return await _backend.rewrite_summary(**kwargs)


class DefaultPublishService:
    """Default adapter that delegates to function-based backend calls."""

    async def publish_post(self, **kwargs) -> bool:
        return await _backend.publish_post(**kwargs)

    async def submit_credentials(self, **kwargs) -> None:
        await _backend.submit_credentials(**kwargs)


@dataclass(slots=True)
class AppServices:
    """Aggregated service interfaces consumed by the app layer."""

    items: ItemsService
    rewrite: RewriteService
    publish: PublishService


def build_default_app_services() -> AppServices:
    """Build default app services backed by the function-based backend module."""
    return AppServices(
        items=DefaultItemsService(),
        rewrite=DefaultRewriteService(),
        publish=DefaultPublishService(),
    )


__all__ = [
    "AppServices",
    "ItemsService",
    "PublishService",
    "RewriteService",
    "build_default_app_services",
]
