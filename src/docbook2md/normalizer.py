"""Rewrite DocBook-specific HTML into Markdown-friendly HTML.

Each pass takes the parsed fragment, rewrites the elements it matches in
place and leaves everything else alone. An element that lacks the
structure a pass expects is skipped. Running a pass twice gives the same
result as running it once.
"""

from __future__ import annotations

import logging
from typing import Callable

from docbook2md.html_utils import parse_fragment

try:
    from bs4 import BeautifulSoup
    from bs4.element import NavigableString, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

FOOTNOTE_BACKLINK_TEXT = "↑"


def normalize_docbook_html(html: str) -> str:
    """Apply every normalization pass to an HTML fragment."""
    soup = parse_fragment(html)
    normalize_soup(soup)
    return str(soup)


def normalize_soup(soup: BeautifulSoup) -> BeautifulSoup:
    for rewrite in NORMALIZATION_PASSES:
        rewrite(soup)
    return soup


def convert_literal_layouts(soup: BeautifulSoup) -> None:
    """Turn ``<div class="literallayout"><p>…</p></div>`` into ``<pre><code>``."""
    for layout in soup.select(".literallayout"):
        paragraph = layout.find("p")
        if paragraph is None:
            logger.debug("Skipping literallayout without paragraph")
            continue
        inner = paragraph.decode_contents().strip()
        pre = parse_fragment(f"<pre><code>{inner}</code></pre>").pre
        layout.replace_with(pre.extract())


def wrap_program_listings(soup: BeautifulSoup) -> None:
    """Wrap the content of program listings and screens in ``<code>``."""
    for pre in soup.select("pre.programlisting, pre.screen"):
        if _is_wrapped_in_code(pre):
            continue
        code = soup.new_tag("code")
        code.extend(list(pre.contents))
        pre.append(code)


def convert_example_titles(soup: BeautifulSoup) -> None:
    """Replace example captions by an ``<h6>`` carrying the example's id."""
    for example in soup.select("div.example"):
        caption = example.find("div", class_="example-title")
        if caption is None:
            logger.debug("Skipping example without caption: %s", example.get("id"))
            continue

        anchor = example.get("id")
        heading = soup.new_tag("h6")
        if anchor:
            del example["id"]
            heading["id"] = anchor
        heading.extend(list(caption.contents))
        caption.replace_with(heading)


def format_footnote_refs(soup: BeautifulSoup) -> None:
    """Move footnote reference links inside their superscript marker.

    ``<a class="footnote"><sup>3</sup></a>`` becomes
    ``<sup>3<a class="footnote"></a></sup>``.
    """
    for link in soup.select("a.footnote, a.footnoteref"):
        children = link.find_all(True, recursive=False)
        if len(children) != 1 or children[0].name != "sup":
            continue

        sup = children[0]
        link.insert_before(sup.extract())
        # Whatever label the link still holds belongs to the marker.
        sup.extend(list(link.contents))
        sup.append(link.extract())


def format_footnote_bodies(soup: BeautifulSoup) -> None:
    """Put the footnote number and a back link at the start of the footnote text."""
    for footnote in soup.select("div.footnote"):
        paragraph = footnote.find("p")
        link = footnote.find("a")
        sup = footnote.find("sup")
        if paragraph is None or link is None or sup is None:
            logger.debug("Skipping malformed footnote: %s", footnote.get("id"))
            continue
        if _is_inside(sup, link):
            sup.extract()
        elif _is_inside(link, sup):
            if link.get_text() == FOOTNOTE_BACKLINK_TEXT:
                link.extract()
            else:
                # The link text is the footnote number.
                link.unwrap()

        anchor = footnote.get("id")
        if anchor:
            sup["id"] = anchor
            del footnote["id"]

        link.extract()
        paragraph.insert(0, sup.extract())

        link.clear()
        link.append(FOOTNOTE_BACKLINK_TEXT)
        sup.append(link)


def _is_inside(node: Tag, ancestor: Tag) -> bool:
    return any(parent is ancestor for parent in node.parents)


def _is_wrapped_in_code(pre: Tag) -> bool:
    elements = pre.find_all(True, recursive=False)
    if len(elements) != 1 or elements[0].name != "code":
        return False
    return all(
        not isinstance(child, NavigableString) or not child.strip()
        for child in pre.contents
        if child is not elements[0]
    )


NORMALIZATION_PASSES: tuple[Callable[[BeautifulSoup], None], ...] = (
    convert_literal_layouts,
    wrap_program_listings,
    convert_example_titles,
    format_footnote_refs,
    format_footnote_bodies,
)
