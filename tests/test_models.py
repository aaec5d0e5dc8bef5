"""Tests for backend payload models."""

from __future__ import annotations

from curation_dashboard.models import Item, TwitterCredentials


def test_item_from_dict_reads_all_fields() -> None:
    item = Item.from_dict(
        {
            "id": 7,
            "source": "Daily",
            "title": "Headline",
            "time": "2024-01-15",
            "tags": "ai, policy",
            "link": "https://example.com/7",
            "score": 8,
            "summary": "Para one.\nPara two.",
        }
    )

    assert item == Item(
        id=7,
        source="Daily",
        title="Headline",
        time="2024-01-15",
        tags="ai, policy",
        link="https://example.com/7",
        score=8.0,
        summary="Para one.\nPara two.",
    )


def test_item_from_dict_rejects_unusable_ids() -> None:
    assert Item.from_dict({"id": "7"}) is None
    assert Item.from_dict({"id": True}) is None
    assert Item.from_dict({"title": "no id"}) is None


def test_item_from_dict_defaults_bad_fields() -> None:
    item = Item.from_dict({"id": 1, "title": None, "score": "high", "tags": ["a"]})

    assert item.title == ""
    assert item.score == 0.0
    assert item.tags == ""
    assert item.summary == ""


def test_credentials_complete_only_when_every_field_set() -> None:
    assert TwitterCredentials().is_complete() is False
    partial = TwitterCredentials(api_key="k", api_secret="s", bearer_token="b", access_token="t")
    assert partial.is_complete() is False
    partial.access_token_secret = "   "
    assert partial.is_complete() is False
    partial.access_token_secret = "ts"
    assert partial.is_complete() is True
