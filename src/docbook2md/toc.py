"""Build the chapter tree from the DocBook table of contents.

The outline is read from ``div.toc > ul.toc``. Every entry owns the element
of the document whose ``id`` matches the entry's link fragment. Entries are
extracted from one shared soup, children before their parent, so that a
parent only keeps the markup that none of its descendants claimed. What is
left once the walk is over becomes the front matter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from docbook2md.chapters import Chapter, FrontMatter, flatten_chapters, link_siblings
from docbook2md.html_utils import id_from_ref, normalize_text, parse_fragment

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

_LIST_TAGS = ["ul", "ol"]


@dataclass
class TOCEntry:
    """Metadata read from one ``<li>`` of the table of contents."""

    type: str
    anchor: str
    title: str


@dataclass
class DocumentOutline:
    """A document split along its table of contents."""

    front_matter: FrontMatter
    tree: list[Chapter] = field(default_factory=list)
    chapters: list[Chapter] = field(default_factory=list)


def split_document(html: str, *, title: str) -> DocumentOutline:
    """Split a normalized DocBook HTML body into front matter and chapters.

    Args:
        html: The normalized ``<body>`` content.
        title: Document title, given to the front matter.

    Returns:
        The outline tree, its pre-order flattening and the front matter
        holding every piece of markup no TOC entry claimed.
    """
    document = parse_fragment(html)
    toc_list = detach_toc(document)

    tree: list[Chapter] = []
    if toc_list is not None:
        tree = parse_toc_list(toc_list, document)
    else:
        logger.info("No table of contents found, keeping the whole document as front matter")

    front_matter = FrontMatter(title=title, content=str(document))
    return DocumentOutline(
        front_matter=front_matter, tree=tree, chapters=flatten_chapters(tree)
    )


def detach_toc(document: BeautifulSoup) -> Tag | None:
    """Remove every ``div.toc`` from the document and return the outline list.

    The first table of contents supplies the outline; the others (per-chapter
    tables of contents) are dropped with it.
    """
    tocs = document.select("div.toc")
    for toc in tocs:
        toc.extract()
    if not tocs:
        return None
    return tocs[0].find(_LIST_TAGS, class_="toc", recursive=False)


def parse_toc_list(
    toc_list: Tag,
    document: BeautifulSoup,
    level: int = 0,
    parent: Chapter | None = None,
) -> list[Chapter]:
    """Build the chapters of one TOC level and extract their content.

    Sub-lists are walked before the entry's own element is extracted from
    ``document``; the extraction of a parent therefore sees a document from
    which all of its descendants are already gone.

    Args:
        toc_list: A ``<ul>`` (or ``<ol>``) of the table of contents.
        document: The shared soup, modified in place.
        level: Depth of this list in the outline, 0 for the top level.
        parent: Chapter owning this list, None at the top level.

    Returns:
        The chapters of this level in document order, with siblings linked.
    """
    chapters: list[Chapter] = []

    for item in toc_list.find_all("li", recursive=False):
        entry = read_toc_entry(item)
        chapter = Chapter(
            id=entry.anchor,
            type=entry.type,
            title=entry.title,
            level=level,
            num=len(chapters) + 1,
            parent=parent,
        )

        sub_list = item.find(_LIST_TAGS, recursive=False)
        if sub_list is not None:
            chapter.children = parse_toc_list(sub_list, document, level + 1, chapter)

        chapter.content = extract_html(document, chapter.id)
        logger.debug(
            "Extracted chapter %r (%s, level %d): %d chars",
            chapter.id,
            chapter.type,
            level,
            len(chapter.content),
        )
        chapters.append(chapter)

    return link_siblings(chapters)


def read_toc_entry(item: Tag) -> TOCEntry:
    """Read type, anchor and title from ``<li><span class=…><a href=…>``."""
    span = item.find("span", recursive=False)
    link = span.find("a", recursive=False) if span is not None else None

    entry_type = " ".join(span.get("class", [])) if span is not None else ""
    if link is None:
        return TOCEntry(type=entry_type, anchor="", title="")
    return TOCEntry(
        type=entry_type,
        anchor=id_from_ref(link.get("href")),
        title=normalize_text(link.get_text()),
    )


def extract_html(document: BeautifulSoup, anchor: str) -> str:
    """Return the outer HTML of the element with id ``anchor`` and remove it.

    Returns an empty string when no element carries that id.
    """
    if not anchor:
        logger.warning("TOC entry without anchor, content left empty")
        return ""
    element = document.find(attrs={"id": anchor})
    if element is None:
        logger.warning("No element found for TOC anchor %r", anchor)
        return ""
    html = str(element)
    element.decompose()
    return html
