"""Curation dashboard: a terminal UI to review, edit and publish backend content items."""

from curation_dashboard.config import load_config, save_config
from curation_dashboard.editor import EditorEvent, EditorState, InlineEditor, RewriteKind
from curation_dashboard.models import (
    Anchor,
    EditSession,
    Item,
    PageButton,
    PageResult,
    TwitterCredentials,
    UserConfig,
)
from curation_dashboard.paginator import Paginator, build_page_buttons
from curation_dashboard.posts import build_hashtag_line, compose_post

__version__ = "0.1.0"

__all__ = [
    "Anchor",
    "EditSession",
    "EditorEvent",
    "EditorState",
    "InlineEditor",
    "Item",
    "PageButton",
    "PageResult",
    "Paginator",
    "RewriteKind",
    "TwitterCredentials",
    "UserConfig",
    "__version__",
    "build_hashtag_line",
    "build_page_buttons",
    "compose_post",
    "load_config",
    "save_config",
]
