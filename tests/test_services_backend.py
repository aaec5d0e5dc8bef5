"""Tests for the function-based backend calls."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from curation_dashboard.models import TwitterCredentials
from curation_dashboard.services.backend_service import (
    BackendResponseError,
    expand_summary,
    fetch_item_summary,
    fetch_page,
    parse_page_payload,
    publish_post,
    rewrite_summary,
    shrink_summary,
    submit_credentials,
)

BASE_URL = "http://backend.test"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _recording_handler(payload, *, status_code: int = 200):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status_code, json=payload)

    return handler, seen


class TestParsePagePayload:
    def test_keeps_order_and_has_more(self) -> None:
        result = parse_page_payload(
            {
                "items": [
                    {"id": 3, "title": "C", "score": 1},
                    {"id": 1, "title": "A", "score": 2.5},
                ],
                "has_more": True,
            }
        )

        assert [item.id for item in result.items] == [3, 1]
        assert result.items[0].score == 1.0
        assert result.has_more is True

    def test_skips_malformed_and_duplicate_ids(self) -> None:
        result = parse_page_payload(
            {
                "items": [
                    {"id": 1, "title": "first"},
                    {"id": "2", "title": "string id"},
                    {"id": True, "title": "bool id"},
                    "not a dict",
                    {"id": 1, "title": "duplicate"},
                    {"id": 4},
                ],
                "has_more": False,
            }
        )

        assert [item.id for item in result.items] == [1, 4]
        assert result.items[0].title == "first"

    def test_non_boolean_has_more_is_false(self) -> None:
        assert parse_page_payload({"items": [], "has_more": "yes"}).has_more is False
        assert parse_page_payload({"items": []}).has_more is False

    def test_missing_items_list_raises(self) -> None:
        with pytest.raises(BackendResponseError):
            parse_page_payload({"has_more": True})


@pytest.mark.asyncio
async def test_fetch_page_sends_limit_and_page() -> None:
    handler, seen = _recording_handler(
        {"items": [{"id": 7, "title": "Seven", "summary": "Line one\nLine two"}], "has_more": True}
    )
    async with _client(handler) as client:
        result = await fetch_page(
            client=client, base_url=BASE_URL, page=2, limit=5, timeout_seconds=30
        )

    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/api/newspapers"
    assert request.url.params["limit"] == "5"
    assert request.url.params["page"] == "2"
    assert result.items[0].summary == "Line one\nLine two"
    assert result.has_more is True


@pytest.mark.asyncio
async def test_fetch_page_raises_on_server_error() -> None:
    handler, _seen = _recording_handler({"detail": "boom"}, status_code=500)
    async with _client(handler) as client:
        with pytest.raises(httpx.HTTPStatusError):
            await fetch_page(client=client, base_url=BASE_URL, page=0, limit=10, timeout_seconds=30)


@pytest.mark.asyncio
async def test_fetch_page_rejects_non_object_body() -> None:
    handler, _seen = _recording_handler([1, 2, 3])
    async with _client(handler) as client:
        with pytest.raises(BackendResponseError):
            await fetch_page(client=client, base_url=BASE_URL, page=0, limit=10, timeout_seconds=30)


@pytest.mark.asyncio
async def test_fetch_page_rejects_non_json_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    async with _client(handler) as client:
        with pytest.raises(BackendResponseError):
            await fetch_page(client=client, base_url=BASE_URL, page=0, limit=10, timeout_seconds=30)


@pytest.mark.asyncio
async def test_fetch_page_without_shared_client_uses_temp_client() -> None:
    response = MagicMock()
    response.json.return_value = {"items": [], "has_more": False}
    response.raise_for_status = MagicMock()

    class DummyClient:
        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def request(self, *_args, **_kwargs):
            return response

    with patch(
        "curation_dashboard.services.backend_service.httpx.AsyncClient",
        return_value=DummyClient(),
    ):
        result = await fetch_page(
            client=None, base_url=BASE_URL, page=0, limit=10, timeout_seconds=30
        )

    assert result.items == []
    response.raise_for_status.assert_called_once()


@pytest.mark.asyncio
async def test_fetch_item_summary_reads_summary_field() -> None:
    handler, seen = _recording_handler({"summary": "Stored text."})
    async with _client(handler) as client:
        summary = await fetch_item_summary(
            client=client, base_url=BASE_URL, item_id=12, timeout_seconds=30
        )

    assert summary == "Stored text."
    assert seen[0].url.path == "/api/summary"
    assert seen[0].url.params["id"] == "12"


@pytest.mark.asyncio
async def test_shrink_summary_posts_id_and_summary() -> None:
    handler, seen = _recording_handler({"decreaseSummary": "Short."})
    async with _client(handler) as client:
        text = await shrink_summary(
            client=client, base_url=BASE_URL, item_id=7, summary="Long text.", timeout_seconds=30
        )

    assert text == "Short."
    assert seen[0].url.path == "/api/decrease-summary"
    assert json.loads(seen[0].content) == {"id": 7, "summary": "Long text."}


@pytest.mark.asyncio
async def test_expand_summary_posts_summary_text_and_expansion() -> None:
    handler, seen = _recording_handler({"increasedSummary": "Longer."})
    async with _client(handler) as client:
        text = await expand_summary(
            client=client, base_url=BASE_URL, summary="Text.", expansion=50, timeout_seconds=30
        )

    assert text == "Longer."
    assert seen[0].url.path == "/api/increase-summary"
    assert json.loads(seen[0].content) == {"summary_text": "Text.", "expansion": 50}


@pytest.mark.asyncio
async def test_rewrite_summary_posts_instruction() -> None:
    handler, seen = _recording_handler({"editedSummary": "Formal."})
    async with _client(handler) as client:
        text = await rewrite_summary(
            client=client,
            base_url=BASE_URL,
            item_id=3,
            summary="Casual.",
            instruction="make it formal",
            timeout_seconds=30,
        )

    assert text == "Formal."
    assert seen[0].url.path == "/api/edit-summary"
    assert json.loads(seen[0].content) == {
        "id": 3,
        "summary": "Casual.",
        "instruction": "make it formal",
    }


@pytest.mark.asyncio
async def test_rewrite_missing_field_raises() -> None:
    handler, _seen = _recording_handler({"somethingElse": "x"})
    async with _client(handler) as client:
        with pytest.raises(BackendResponseError):
            await shrink_summary(
                client=client, base_url=BASE_URL, item_id=1, summary="x", timeout_seconds=30
            )


@pytest.mark.asyncio
async def test_publish_post_returns_success_flag() -> None:
    handler, seen = _recording_handler({"success": True})
    async with _client(handler) as client:
        ok = await publish_post(
            client=client, base_url=BASE_URL, item_id=9, content="Post body", timeout_seconds=30
        )

    assert ok is True
    assert seen[0].url.path == "/api/publish"
    assert json.loads(seen[0].content) == {"id": 9, "content": "Post body"}


@pytest.mark.asyncio
async def test_publish_post_false_when_backend_reports_failure() -> None:
    handler, _seen = _recording_handler({"success": False})
    async with _client(handler) as client:
        ok = await publish_post(
            client=client, base_url=BASE_URL, item_id=9, content="Post", timeout_seconds=30
        )

    assert ok is False


@pytest.mark.asyncio
async def test_submit_credentials_posts_all_fields(complete_credentials) -> None:
    handler, seen = _recording_handler({"ok": True})
    async with _client(handler) as client:
        await submit_credentials(
            client=client,
            base_url=BASE_URL,
            credentials=complete_credentials,
            timeout_seconds=30,
        )

    assert seen[0].url.path == "/twitter-keys"
    assert json.loads(seen[0].content) == complete_credentials.to_dict()


@pytest.mark.asyncio
async def test_shared_client_receives_timeout() -> None:
    response = httpx.Response(
        200,
        json={"summary": "x"},
        request=httpx.Request("GET", f"{BASE_URL}/api/summary"),
    )
    client = SimpleNamespace(request=AsyncMock(return_value=response))

    await fetch_item_summary(client=client, base_url=BASE_URL, item_id=1, timeout_seconds=12.5)

    _args, kwargs = client.request.call_args
    assert kwargs["timeout"] == 12.5


def test_credentials_dict_uses_backend_field_names() -> None:
    creds = TwitterCredentials(api_key="a", api_secret="b")
    assert set(creds.to_dict()) == {
        "api_key",
        "api_secret",
        "bearer_token",
        "access_token",
        "access_token_secret",
    }
