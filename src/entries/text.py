"""Plain-text helpers for rich markup entry content."""

from __future__ import annotations

import html
import re

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")


def extract_plain_text(content: str) -> str:
    """Strip markup tags and collapse whitespace.

    Tags become a single space so adjacent block elements
    (``<p>a</p><p>b</p>``) don't run their words together.
    """
    if not content:
        return ""
    text = _TAG_RE.sub(" ", content)
    text = html.unescape(text)
    return _WS_RE.sub(" ", text).strip()


def count_words(content: str) -> int:
    """Count whitespace-separated words in the plain text of ``content``."""
    return len(extract_plain_text(content).split())
