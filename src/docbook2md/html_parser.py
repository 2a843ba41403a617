"""Parse DocBook HTML into front matter and a chapter tree."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from docbook2md.anchors import reconcile_anchors
from docbook2md.chapters import Chapter, FrontMatter
from docbook2md.exceptions import ParseError
from docbook2md.html_utils import find_document_root, normalize_text, parse_html
from docbook2md.normalizer import normalize_docbook_html
from docbook2md.toc import split_document

try:
    from bs4 import BeautifulSoup
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise ParseError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"


@dataclass
class ParsedDocbookHtml:
    """Content extracted from DocBook HTML."""

    title: str
    front_matter: FrontMatter
    tree: list[Chapter]
    chapters: list[Chapter]


def parse_docbook_html(
    html: str, *, title: str | None = None, default_title: str = DEFAULT_TITLE
) -> ParsedDocbookHtml:
    """Normalize the body, split it along the TOC and reconcile anchors.

    Args:
        html: Full HTML document produced by the DocBook stylesheet.
        title: Document title. Read from the document when omitted.
        default_title: Title used when the document has none.

    Returns:
        The front matter, the chapter tree and its pre-order flattening.

    Raises:
        ParseError: If ``html`` is empty.
    """
    if not html or not html.strip():
        raise ParseError("Cannot parse an empty HTML document")

    soup = parse_html(html, "lxml")
    document_title = title or _extract_title(soup) or default_title
    body = find_document_root(soup).decode_contents()

    logger.info("Parsing chapters...")
    outline = split_document(normalize_docbook_html(body), title=document_title)
    reconcile_anchors(outline.front_matter, outline.chapters)
    logger.info("Found %d chapters", len(outline.chapters))

    return ParsedDocbookHtml(
        title=document_title,
        front_matter=outline.front_matter,
        tree=outline.tree,
        chapters=outline.chapters,
    )


def _extract_title(soup: BeautifulSoup) -> str | None:
    if soup.title and soup.title.get_text(strip=True):
        return normalize_text(soup.title.get_text())
    heading = soup.find("h1", class_=re.compile(r"\btitle\b"))
    if heading and heading.get_text(strip=True):
        return normalize_text(heading.get_text())
    return None
