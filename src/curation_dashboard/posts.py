"""Compose the text that gets published for an item."""

from __future__ import annotations

POST_SECTION_SEPARATOR = "\n\n"


def build_hashtag_line(tags: str) -> str:
    """Turn a comma-joined tag string into ``#a #b`` form.

    >>> build_hashtag_line("ai, climate ,, policy")
    '#ai #climate #policy'
    """
    return " ".join(f"#{token}" for token in (t.strip() for t in tags.split(",")) if token)


def compose_post(summary: str, tags: str, link: str) -> str:
    """Join summary, hashtag line and link; empty sections are left out.

    The summary goes in verbatim, so the post matches what the editor showed.
    """
    sections = [summary if summary.strip() else "", build_hashtag_line(tags), link.strip()]
    return POST_SECTION_SEPARATOR.join(section for section in sections if section)


__all__ = ["POST_SECTION_SEPARATOR", "build_hashtag_line", "compose_post"]
