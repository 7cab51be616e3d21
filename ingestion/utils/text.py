"""Markup stripping and truncation for feed text fields."""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"\s+")
ELLIPSIS = "…"


def strip_markup(content: Optional[str]) -> str:
    """Return plain text from an HTML fragment with whitespace collapsed."""
    if not content:
        return ""
    soup = BeautifulSoup(content, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    text = soup.get_text(" ")
    return _WHITESPACE.sub(" ", text).strip()


def first_image_src(content: Optional[str]) -> Optional[str]:
    """Return the ``src`` of the first ``<img>`` in an HTML fragment, if any."""
    if not content or "<img" not in content.lower():
        return None
    soup = BeautifulSoup(content, "html.parser")
    img = soup.find("img", src=True)
    if img is None:
        return None
    return str(img["src"]).strip() or None


def truncate(text: str, max_chars: int) -> str:
    """Cut ``text`` to at most ``max_chars`` characters, on a word boundary when possible."""
    if len(text) <= max_chars:
        return text
    cut = text[: max_chars - 1]
    space = cut.rfind(" ")
    # back off to a word boundary only if it keeps half the text
    if space >= max_chars // 2:
        cut = cut[:space]
    return cut.rstrip(" ,;:.-") + ELLIPSIS
