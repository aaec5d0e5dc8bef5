"""Internal service layer for backend calls."""

from curation_dashboard.services.backend_service import (
    BackendResponseError,
    expand_summary,
    fetch_item_summary,
    fetch_page,
    publish_post,
    rewrite_summary,
    shrink_summary,
    submit_credentials,
)

__all__ = [
    "BackendResponseError",
    "expand_summary",
    "fetch_item_summary",
    "fetch_page",
    "publish_post",
    "rewrite_summary",
    "shrink_summary",
    "submit_credentials",
]
