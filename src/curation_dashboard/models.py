"""Data models and constants for the curation dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Application identity: single source of truth for platformdirs config paths
CONFIG_APP_NAME = "curation-dashboard"

DEFAULT_BASE_URL = "http://localhost:8000"

# Paging constants
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Words requested per expand action
DEFAULT_EXPANSION_AMOUNT = 50
MAX_EXPANSION_AMOUNT = 1000

DEFAULT_REQUEST_TIMEOUT = 30

CREDENTIAL_FIELDS: tuple[str, ...] = (
    "api_key",
    "api_secret",
    "bearer_token",
    "access_token",
    "access_token_secret",
)


def _field(data: dict[str, Any], key: str, default: Any, expected_type: type | tuple) -> Any:
    value = data.get(key, default)
    if isinstance(value, bool) and expected_type is not bool:
        return default
    if not isinstance(value, expected_type):
        return default
    return value


@dataclass(slots=True)
class Item:
    """One content record as served by the backend."""

    id: int
    source: str
    title: str
    time: str
    tags: str
    link: str
    score: float
    summary: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Item | None:
        """Build an Item from a backend payload, or None when the id is unusable."""
        item_id = data.get("id")
        if isinstance(item_id, bool) or not isinstance(item_id, int):
            return None
        score = _field(data, "score", 0.0, (int, float))
        return cls(
            id=item_id,
            source=_field(data, "source", "", str),
            title=_field(data, "title", "", str),
            time=_field(data, "time", "", str),
            tags=_field(data, "tags", "", str),
            link=_field(data, "link", "", str),
            score=float(score),
            summary=_field(data, "summary", "", str),
        )


@dataclass(slots=True)
class PageResult:
    """Ordered items for one page plus the continuation flag."""

    items: list[Item] = field(default_factory=list)
    has_more: bool = False


@dataclass(slots=True, frozen=True)
class Anchor:
    """Popup position in page (scroll-content) coordinates."""

    top: int
    left: int


@dataclass(slots=True)
class EditSession:
    """Ephemeral edit state bound to a single item."""

    token: int
    item_id: int
    buffer: str
    anchor: Anchor
    instruction: str = ""
    busy: bool = False


@dataclass(slots=True)
class PageButton:
    """One entry of the page selector bar."""

    label: str
    target: int | None  # zero-based page index; None for the current-page marker
    disabled: bool = False
    current: bool = False
    kind: str = "page"  # "previous" | "next" | "page" | "current"


@dataclass(slots=True)
class TwitterCredentials:
    """Keys the backend uses to publish on the operator's behalf."""

    api_key: str = ""
    api_secret: str = ""
    bearer_token: str = ""
    access_token: str = ""
    access_token_secret: str = ""

    def is_complete(self) -> bool:
        return all(getattr(self, name).strip() for name in CREDENTIAL_FIELDS)

    def to_dict(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in CREDENTIAL_FIELDS}


@dataclass(slots=True)
class UserConfig:
    """Persisted dashboard configuration."""

    base_url: str = DEFAULT_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    expansion_amount: int = DEFAULT_EXPANSION_AMOUNT
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    theme_name: str = "monokai"
    credentials: TwitterCredentials = field(default_factory=TwitterCredentials)
    version: int = 1
    config_defaulted: bool = False  # runtime only: set when a corrupt file was replaced


__all__ = [
    "CONFIG_APP_NAME",
    "CREDENTIAL_FIELDS",
    "DEFAULT_BASE_URL",
    "DEFAULT_EXPANSION_AMOUNT",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_REQUEST_TIMEOUT",
    "MAX_EXPANSION_AMOUNT",
    "MAX_PAGE_SIZE",
    "Anchor",
    "EditSession",
    "Item",
    "PageButton",
    "PageResult",
    "TwitterCredentials",
    "UserConfig",
]
