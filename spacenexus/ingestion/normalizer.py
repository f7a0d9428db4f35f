"""Turn raw feed content into bounded plain-text excerpts."""

import re
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

EXCERPT_MAX_LENGTH = 300
ELLIPSIS = "..."

_TAG_RE = re.compile(r"<[^>]*>")


def strip_html(content: str) -> str:
    """Strip markup and entities, returning whitespace-collapsed text."""
    if not content:
        return ""

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        soup = BeautifulSoup(content, "html.parser")

    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()

    text = soup.get_text(" ")
    # Entity decoding can surface literal tags, e.g. "&lt;b&gt;"
    text = _TAG_RE.sub("", text)
    return " ".join(text.split())


def extract_excerpt(content: str, max_length: int = EXCERPT_MAX_LENGTH) -> str:
    """Build a plain-text excerpt no longer than max_length plus an ellipsis."""
    text = strip_html(content)
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip() + ELLIPSIS
