"""Backend HTTP calls: page fetch, summary rewrites, publish, credentials."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from curation_dashboard.models import Item, PageResult, TwitterCredentials

logger = logging.getLogger(__name__)

PAGE_PATH = "/api/newspapers"
SUMMARY_PATH = "/api/summary"
PUBLISH_PATH = "/api/publish"
SHRINK_PATH = "/api/decrease-summary"
EXPAND_PATH = "/api/increase-summary"
EDIT_PATH = "/api/edit-summary"
CREDENTIALS_PATH = "/twitter-keys"


class BackendResponseError(ValueError):
    """Raised when a successful HTTP response carries an unusable body."""


def _json_object(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise BackendResponseError("response body is not JSON") from exc
    if not isinstance(data, dict):
        raise BackendResponseError("response body is not a JSON object")
    return data


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise BackendResponseError(f"response is missing string field {key!r}")
    return value


def parse_page_payload(data: dict[str, Any]) -> PageResult:
    """Convert a ``{items, has_more}`` payload into a PageResult.

    Entries without a usable integer id are skipped; a repeated id keeps
    its first occurrence so ids stay unique within the page.
    """
    raw_items = data.get("items")
    if not isinstance(raw_items, list):
        raise BackendResponseError("response is missing the items list")
    items: list[Item] = []
    seen: set[int] = set()
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        item = Item.from_dict(raw)
        if item is None or item.id in seen:
            logger.debug("Skipping malformed or duplicate item: %r", raw)
            continue
        seen.add(item.id)
        items.append(item)
    has_more = data.get("has_more", False)
    return PageResult(items=items, has_more=has_more is True)


async def _send(
    client: httpx.AsyncClient | None,
    method: str,
    url: str,
    *,
    timeout_seconds: float,
    **kwargs: Any,
) -> httpx.Response:
    """Issue one request on the shared client, or a temporary one if absent."""
    if client is not None:
        response = await client.request(method, url, timeout=timeout_seconds, **kwargs)
    else:
        async with httpx.AsyncClient() as tmp_client:
            response = await tmp_client.request(method, url, timeout=timeout_seconds, **kwargs)
    response.raise_for_status()
    return response


async def fetch_page(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    page: int,
    limit: int,
    timeout_seconds: float,
) -> PageResult:
    """Fetch one page of items."""
    response = await _send(
        client,
        "GET",
        f"{base_url}{PAGE_PATH}",
        params={"limit": limit, "page": max(0, page)},
        timeout_seconds=timeout_seconds,
    )
    return parse_page_payload(_json_object(response))


async def fetch_item_summary(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    item_id: int,
    timeout_seconds: float,
) -> str:
    """Fetch the stored summary for one item."""
    response = await _send(
        client,
        "GET",
        f"{base_url}{SUMMARY_PATH}",
        params={"id": item_id},
        timeout_seconds=timeout_seconds,
    )
    return _require_str(_json_object(response), "summary")


async def shrink_summary(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    item_id: int,
    summary: str,
    timeout_seconds: float,
) -> str:
    """Ask the backend for a shorter version of *summary*."""
    response = await _send(
        client,
        "POST",
        f"{base_url}{SHRINK_PATH}",
        json={"id": item_id, "summary": summary},
        timeout_seconds=timeout_seconds,
    )
    return _require_str(_json_object(response), "decreaseSummary")


async def expand_summary(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    summary: str,
    expansion: int,
    timeout_seconds: float,
) -> str:
    """Ask the backend to lengthen *summary* by *expansion* words."""
    response = await _send(
        client,
        "POST",
        f"{base_url}{EXPAND_PATH}",
        json={"summary_text": summary, "expansion": expansion},
        timeout_seconds=timeout_seconds,
    )
    return _require_str(_json_object(response), "increasedSummary")


async def rewrite_summary(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    item_id: int,
    summary: str,
    instruction: str,
    timeout_seconds: float,
) -> str:
    """Ask the backend to rewrite *summary* following *instruction*."""
    response = await _send(
        client,
        "POST",
        f"{base_url}{EDIT_PATH}",
        json={"id": item_id, "summary": summary, "instruction": instruction},
        timeout_seconds=timeout_seconds,
    )
    return _require_str(_json_object(response), "editedSummary")


async def publish_post(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    item_id: int,
    content: str,
    timeout_seconds: float,
) -> bool:
    """Publish *content* for an item. Returns the backend's success flag."""
    response = await _send(
        client,
        "POST",
        f"{base_url}{PUBLISH_PATH}",
        json={"id": item_id, "content": content},
        timeout_seconds=timeout_seconds,
    )
    return _json_object(response).get("success") is True


async def submit_credentials(
    *,
    client: httpx.AsyncClient | None,
    base_url: str,
    credentials: TwitterCredentials,
    timeout_seconds: float,
) -> None:
    """Hand the publishing credentials to the backend."""
    await _send(
        client,
        "POST",
        f"{base_url}{CREDENTIALS_PATH}",
        json=credentials.to_dict(),
        timeout_seconds=timeout_seconds,
    )


__all__ = [
    "CREDENTIALS_PATH",
    "EDIT_PATH",
    "EXPAND_PATH",
    "PAGE_PATH",
    "PUBLISH_PATH",
    "SHRINK_PATH",
    "SUMMARY_PATH",
    "BackendResponseError",
    "expand_summary",
    "fetch_item_summary",
    "fetch_page",
    "parse_page_payload",
    "publish_post",
    "rewrite_summary",
    "shrink_summary",
    "submit_credentials",
]
