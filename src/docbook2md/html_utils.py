"""Shared HTML utilities for DocBook HTML processing."""

from __future__ import annotations

import re

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


HEADING_RE = re.compile(r"^h[1-6]$")

# Fragments are parsed with html.parser so no <html>/<body> wrapper is added.
FRAGMENT_PARSER = "html.parser"

# literallayout keeps its line indentation in a <p>; bs4 would otherwise
# collapse whitespace-only strings there to a single newline.
PRESERVE_WHITESPACE_TAGS = frozenset({"pre", "textarea", "p"})


def find_document_root(soup: BeautifulSoup) -> Tag:
    """Return the <body> element of a parsed document, or the soup itself."""
    if soup.body:
        return soup.body
    return soup


def parse_html(html: str, features: str = FRAGMENT_PARSER) -> BeautifulSoup:
    """Parse HTML, keeping whitespace inside paragraphs and preformatted blocks."""
    return BeautifulSoup(html, features, preserve_whitespace_tags=PRESERVE_WHITESPACE_TAGS)


def parse_fragment(html: str) -> BeautifulSoup:
    """Parse an HTML fragment without adding document wrappers."""
    return parse_html(html)


def id_from_ref(href: str | None) -> str:
    """Return the fragment identifier of a reference URI.

    ``"#ch01"`` and ``"book.html#ch01"`` both give ``"ch01"``; an href
    without a fragment gives an empty string.
    """
    if not href or "#" not in href:
        return ""
    return href.split("#", 1)[1].strip()


def normalize_text(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()
