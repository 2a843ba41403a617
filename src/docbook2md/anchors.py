"""Keep anchors reachable once sectioning containers are dropped."""

from __future__ import annotations

from typing import Iterable

from docbook2md.chapters import Chapter, FrontMatter
from docbook2md.html_utils import HEADING_RE, parse_fragment

_SECTIONING_TAGS = ["section", "article"]


def reconcile_section_anchors(html: str) -> str:
    """Move the id of each ``<section>`` to its first heading.

    Markdown has no equivalent for sectioning elements, so their ids would be
    lost on rendering. A section keeps its id when it has no heading or when
    the heading already has an id of its own.
    """
    if not html:
        return html
    soup = parse_fragment(html)
    for section in soup.find_all(_SECTIONING_TAGS):
        section_id = section.get("id")
        if not section_id:
            continue
        heading = section.find(HEADING_RE)
        if heading is None or heading.get("id"):
            continue
        heading["id"] = section_id
        del section["id"]
    return str(soup)


def reconcile_anchors(front_matter: FrontMatter, chapters: Iterable[Chapter]) -> None:
    """Apply :func:`reconcile_section_anchors` to every extracted fragment."""
    front_matter.content = reconcile_section_anchors(front_matter.content)
    for chapter in chapters:
        chapter.content = reconcile_section_anchors(chapter.content)


def collect_anchor_targets(
    front_matter: FrontMatter, chapters: Iterable[Chapter]
) -> dict[str, str]:
    """Map every id found in the fragments to the file that will hold it.

    Chapters must already have a filename. When an id appears twice, the
    first file wins.
    """
    chapters = list(chapters)
    targets: dict[str, str] = {}
    fragments = [(front_matter.filename, front_matter.content)]
    fragments.extend((chapter.filename, chapter.content) for chapter in chapters)

    for filename, content in fragments:
        if not filename or not content:
            continue
        for element in parse_fragment(content).find_all(id=True):
            targets.setdefault(element["id"], filename)

    # Entries whose anchor matched nothing still own their file.
    for chapter in chapters:
        if chapter.id and chapter.filename:
            targets.setdefault(chapter.id, chapter.filename)
    return targets
