"""UI-facing copy builders for confirmations, errors, and notifications."""

from __future__ import annotations

import httpx


def _ensure_sentence(text: str) -> str:
    """Return text with terminal sentence punctuation."""
    cleaned = text.strip()
    if not cleaned:
        return ""
    if cleaned.endswith((".", "!", "?")):
        return cleaned
    return f"{cleaned}."


def build_actionable_error(
    action: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable error message."""
    lines = [f"Could not {action.strip()}."]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_next_step_hint(next_step: str) -> str:
    """Build a canonical next-step guidance line."""
    return f"Next step: {_ensure_sentence(next_step)}"


def build_actionable_warning(
    message: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable warning message."""
    lines = [_ensure_sentence(message)]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def describe_request_failure(exc: BaseException) -> str:
    """Return a short why-line for a failed backend call."""
    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
        if status_code == 429:
            return "the backend is rate limiting requests (HTTP 429)"
        if status_code >= 500:
            return f"the backend is unavailable right now (HTTP {status_code})"
        return f"the backend rejected the request (HTTP {status_code})"
    if isinstance(exc, (httpx.HTTPError, OSError)):
        return "a network or I/O error occurred"
    return "the backend returned an unexpected response"


def build_fetch_error_message(page: int, exc: BaseException) -> str:
    """Build the error text that replaces the item table."""
    return build_actionable_error(
        f"load page {page + 1}",
        why=describe_request_failure(exc),
        next_step="press [ or ] to try another page, or r to reload",
    )


def build_rewrite_error_message(kind: str, exc: BaseException) -> str:
    """Build the alert text for a failed shrink/expand/rewrite request."""
    return build_actionable_error(
        f"{kind} the summary",
        why=describe_request_failure(exc),
        next_step="the text was left unchanged; retry or edit it by hand",
    )


def build_publish_confirmation_prompt(content: str) -> str:
    """Build the confirmation prompt shown before publishing."""
    return f"Publish this post?\n\n{content}"


__all__ = [
    "build_actionable_error",
    "build_actionable_warning",
    "build_fetch_error_message",
    "build_next_step_hint",
    "build_publish_confirmation_prompt",
    "build_rewrite_error_message",
    "describe_request_failure",
]
