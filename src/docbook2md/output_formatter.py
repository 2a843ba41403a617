"""Format converted chapters into summary, table of contents and records."""

from __future__ import annotations

from typing import Iterable

try:
    import tiktoken
except ImportError:  # pragma: no cover - optional dependency
    tiktoken = None

from docbook2md.chapters import Chapter, FrontMatter
from docbook2md.schemas import ConversionResult


def format_book(
    *,
    title: str,
    front_matter: FrontMatter,
    tree: list[Chapter],
    chapters: list[Chapter],
) -> ConversionResult:
    """Create the summary, the ``SUMMARY.md`` listing and the output records."""
    toc = render_summary_file(front_matter, tree)

    summary_lines = [f"Title: {title}", f"Chapters: {count_chapters(tree)}"]
    empty = [chapter.id or chapter.title for chapter in chapters if not chapter.content]
    if empty:
        summary_lines.append(f"Empty chapters: {', '.join(empty)}")

    text = "\n\n".join(
        [front_matter.markdown or ""] + [chapter.markdown or "" for chapter in chapters]
    )
    token_estimate = _format_token_count(text)
    if token_estimate:
        summary_lines.append(f"Estimated tokens: {token_estimate}")

    return ConversionResult(
        title=title,
        front_matter=front_matter.to_record(),
        chapters=[chapter.to_record() for chapter in chapters],
        summary="\n".join(summary_lines),
        toc=toc,
    )


def count_chapters(chapters: Iterable[Chapter]) -> int:
    """Count total chapters in the tree."""
    total = 0
    for chapter in chapters:
        total += 1
        total += count_chapters(chapter.children)
    return total


def render_summary_file(front_matter: FrontMatter, tree: list[Chapter]) -> str:
    """Render a GitBook ``SUMMARY.md`` for the book."""
    lines = ["# Summary", "", f"* [{_escape_label(front_matter.title)}]({front_matter.filename})"]
    entries = _render_toc(tree)
    if entries:
        lines.append(entries)
    return "\n".join(lines) + "\n"


def _render_toc(chapters: list[Chapter], indent: int = 0) -> str:
    lines: list[str] = []
    for chapter in chapters:
        prefix = " " * (indent * 4) + "* "
        label = _escape_label(chapter.title or chapter.id)
        if chapter.filename:
            lines.append(f"{prefix}[{label}]({chapter.filename})")
        else:
            lines.append(prefix + label)
        if chapter.children:
            lines.append(_render_toc(chapter.children, indent + 1))
    return "\n".join(lines)


def _escape_label(text: str) -> str:
    return text.replace("[", "\\[").replace("]", "\\]")


def _format_token_count(text: str) -> str | None:
    if not tiktoken or not text.strip():
        return None
    try:
        encoding = tiktoken.get_encoding("o200k_base")
        total_tokens = len(encoding.encode(text, disallowed_special=()))
    except Exception:
        return None

    if total_tokens >= 1_000_000:
        return f"{total_tokens / 1_000_000:.1f}M"
    if total_tokens >= 1_000:
        return f"{total_tokens / 1_000:.1f}k"
    return str(total_tokens)
