"""Outline chapters built from the table of contents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from docbook2md.schemas import ChapterRecord, FrontMatterRecord


@dataclass(eq=False)
class Chapter:
    """A node of the document outline.

    ``parent``, ``previous`` and ``next`` are back-references; only
    ``children`` owns nodes. They are left out of ``repr`` so printing a
    chapter does not walk the whole tree.
    """

    id: str
    type: str
    title: str
    level: int = 0
    num: int = 1
    content: str = ""
    parent: Chapter | None = field(default=None, repr=False)
    children: list[Chapter] = field(default_factory=list, repr=False)
    previous: Chapter | None = field(default=None, repr=False)
    next: Chapter | None = field(default=None, repr=False)
    filename: str | None = None
    markdown: str | None = None

    @property
    def numbering(self) -> tuple[int, ...]:
        """Sibling positions from the root down to this chapter."""
        nums: list[int] = []
        node: Chapter | None = self
        while node is not None:
            nums.append(node.num)
            node = node.parent
        return tuple(reversed(nums))

    def iter_descendants(self) -> Iterator[Chapter]:
        """Yield every descendant in pre-order."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def to_record(self) -> ChapterRecord:
        return ChapterRecord(
            id=self.id,
            type=self.type,
            title=self.title,
            level=self.level,
            num=self.num,
            content=self.content,
            parent_id=self.parent.id if self.parent else None,
            children_ids=[child.id for child in self.children],
            previous_id=self.previous.id if self.previous else None,
            next_id=self.next.id if self.next else None,
            filename=self.filename,
            markdown=self.markdown,
        )


@dataclass
class FrontMatter:
    """Residual content placed before the first chapter."""

    title: str
    content: str = ""
    filename: str = "README.md"
    markdown: str | None = None

    def to_record(self) -> FrontMatterRecord:
        return FrontMatterRecord(
            title=self.title,
            content=self.content,
            filename=self.filename,
            markdown=self.markdown,
        )


def link_siblings(chapters: list[Chapter]) -> list[Chapter]:
    """Set ``previous``/``next`` on a fully built sibling group."""
    for index, chapter in enumerate(chapters):
        chapter.previous = chapters[index - 1] if index > 0 else None
        chapter.next = chapters[index + 1] if index + 1 < len(chapters) else None
    return chapters


def flatten_chapters(chapters: list[Chapter]) -> list[Chapter]:
    """Linearize a chapter tree in pre-order."""
    flat: list[Chapter] = []
    for chapter in chapters:
        flat.append(chapter)
        flat.extend(chapter.iter_descendants())
    return flat
