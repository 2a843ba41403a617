"""Conversion output model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from docbook2md.schemas.chapters import ChapterRecord, FrontMatterRecord

SUMMARY_FILENAME = "SUMMARY.md"


class ConversionResult(BaseModel):
    """Final conversion output.

    Attributes:
        title: Document title.
        front_matter: The introductory chapter built from unclaimed content.
        chapters: Outline chapters in pre-order.
        summary: Short human-readable report of the conversion.
        toc: GitBook-style ``SUMMARY.md`` listing every output file.
    """

    title: str
    front_matter: FrontMatterRecord
    chapters: list[ChapterRecord] = Field(default_factory=list)
    summary: str = ""
    toc: str = ""

    def files(self) -> dict[str, str]:
        """Return the Markdown files of the book keyed by relative path."""
        files = {self.front_matter.filename: self.front_matter.markdown or ""}
        for chapter in self.chapters:
            if chapter.filename:
                files[chapter.filename] = chapter.markdown or ""
        if self.toc:
            files[SUMMARY_FILENAME] = self.toc
        return files
