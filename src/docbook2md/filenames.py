"""Output filenames for chapters."""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable

from docbook2md.chapters import Chapter
from docbook2md.schemas.conversion import SUMMARY_FILENAME

DEFAULT_SLUG = "chapter"
README_FILENAME = "README.md"


def slugify(text: str) -> str:
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = text.strip().lower()
    text = re.sub(r"[’'\"]", "", text)
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return re.sub(r"-+", "-", text).strip("-")


def generate_filename(chapter: Chapter, extension: str = "md", prefix: bool = False) -> str:
    """Build a filename from the chapter title.

    Args:
        chapter: The chapter to name.
        extension: File extension, without the dot.
        prefix: If True, start the name with the chapter numbering
            (``1-2-installing.md`` for the second child of the first chapter).

    Returns:
        The filename, not guaranteed to be unique.
    """
    slug = slugify(chapter.title) or slugify(chapter.id) or DEFAULT_SLUG
    if prefix:
        slug = "-".join(str(num) for num in chapter.numbering) + "-" + slug
    return f"{slug}.{extension}"


def assign_filenames(
    chapters: Iterable[Chapter], extension: str = "md", prefix: bool = False
) -> None:
    """Give every chapter a filename unique within the run."""
    # Names written next to the chapters, compared case-insensitively.
    used: dict[str, int] = {README_FILENAME.lower(): 1, SUMMARY_FILENAME.lower(): 1}
    for chapter in chapters:
        filename = generate_filename(chapter, extension, prefix)
        stem, _, ext = filename.rpartition(".")
        count = used.get(filename.lower(), 0)
        while count:
            count += 1
            candidate = f"{stem}-{count}.{ext}"
            if candidate.lower() not in used:
                used[filename.lower()] = count
                filename = candidate
                break
        used[filename.lower()] = 1
        chapter.filename = filename
