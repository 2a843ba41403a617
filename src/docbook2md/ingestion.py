"""Conversion pipeline for DocBook -> HTML -> Markdown chapters."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from docbook2md.anchors import collect_anchor_targets
from docbook2md.chapters import Chapter, FrontMatter
from docbook2md.config import DOCBOOK2MD_KEEP_INTERMEDIATE, DOCBOOK2MD_MARKDOWN_EXTENSION
from docbook2md.exceptions import ConversionError
from docbook2md.file_utils import mkdir_async, read_text_async, write_files_async
from docbook2md.filenames import assign_filenames
from docbook2md.html_parser import DEFAULT_TITLE, parse_docbook_html
from docbook2md.html_utils import parse_fragment
from docbook2md.markdown import convert_fragment_to_markdown, make_href_resolver
from docbook2md.output_formatter import format_book
from docbook2md.schemas import ConversionResult
from docbook2md.transform import transform_docbook_to_html

logger = logging.getLogger(__name__)


@dataclass
class ConversionOptions:
    """Options for a conversion run.

    Attributes:
        title: Document title. Read from the HTML, then from the source
            filename, when omitted.
        prefix_filenames: If True, prefix chapter filenames with their
            numbering (``1-2-installing.md``).
        extension: Extension of the chapter files.
        render_markdown: If False, only split the HTML and skip Markdown.
        stylesheet: XSL stylesheet used by xsltproc.
        keep_intermediate: Keep the HTML written by xsltproc.
    """

    title: str | None = None
    prefix_filenames: bool = False
    extension: str = DOCBOOK2MD_MARKDOWN_EXTENSION
    render_markdown: bool = True
    stylesheet: str | None = None
    keep_intermediate: bool = DOCBOOK2MD_KEEP_INTERMEDIATE


async def convert_docbook(
    source_path: Path, *, options: ConversionOptions | None = None
) -> ConversionResult:
    """Transform a DocBook file with xsltproc and split it into chapters.

    Args:
        source_path: Path to the DocBook XML document.
        options: Conversion options. Uses defaults if None.

    Returns:
        The conversion result.

    Raises:
        TransformError: If xsltproc fails or its output cannot be read.
    """
    opts = options or ConversionOptions()
    # Blocking call wrapped in thread
    html = await asyncio.to_thread(
        transform_docbook_to_html,
        source_path,
        stylesheet=opts.stylesheet,
        keep_intermediate=opts.keep_intermediate,
    )
    return convert_html(html, options=opts, default_title=source_path.stem)


async def convert_html_file(
    html_path: Path, *, options: ConversionOptions | None = None
) -> ConversionResult:
    """Split an HTML file already produced by the DocBook stylesheet."""
    html = await read_text_async(html_path)
    return convert_html(html, options=options, default_title=html_path.stem)


def convert_html(
    html: str,
    *,
    options: ConversionOptions | None = None,
    default_title: str | None = None,
) -> ConversionResult:
    """Split DocBook HTML into chapters and render them to Markdown."""
    opts = options or ConversionOptions()
    parsed = parse_docbook_html(
        html, title=opts.title, default_title=default_title or DEFAULT_TITLE
    )

    assign_filenames(parsed.chapters, opts.extension, opts.prefix_filenames)

    if opts.render_markdown:
        _populate_markdown(parsed.front_matter, parsed.chapters)

    return format_book(
        title=parsed.title,
        front_matter=parsed.front_matter,
        tree=parsed.tree,
        chapters=parsed.chapters,
    )


async def write_book(result: ConversionResult, output_dir: Path) -> list[Path]:
    """Write the Markdown files of ``result`` under ``output_dir``."""
    try:
        await mkdir_async(output_dir, parents=True, exist_ok=True)
        written = await write_files_async(output_dir, result.files())
    except OSError as exc:
        raise ConversionError(f"Cannot write output to {output_dir}: {exc}") from exc
    logger.info("Wrote %d files to %s", len(written), output_dir)
    return written


def _populate_markdown(front_matter: FrontMatter, chapters: list[Chapter]) -> None:
    targets = collect_anchor_targets(front_matter, chapters)

    body = convert_fragment_to_markdown(
        front_matter.content,
        resolve_href=make_href_resolver(targets, front_matter.filename),
    )
    # The title page usually carries the title already.
    if parse_fragment(front_matter.content).find("h1") is None:
        body = f"# {front_matter.title}\n\n{body}"
    front_matter.markdown = body.strip() + "\n"

    for chapter in chapters:
        markdown = convert_fragment_to_markdown(
            chapter.content,
            resolve_href=make_href_resolver(targets, chapter.filename),
        )
        chapter.markdown = markdown + "\n" if markdown else ""
