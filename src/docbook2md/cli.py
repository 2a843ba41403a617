"""Command-line entry point for docbook2md."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from docbook2md.exceptions import Docbook2mdError
from docbook2md.ingestion import (
    ConversionOptions,
    convert_docbook,
    convert_html_file,
    write_book,
)
from docbook2md.schemas import ConversionResult

logger = logging.getLogger("docbook2md")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docbook2md",
        description="Split a DocBook document into one Markdown file per chapter.",
    )
    parser.add_argument("source", type=Path, help="DocBook XML file (or HTML with --html)")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output directory (default: <source stem> next to the source)",
    )
    parser.add_argument(
        "--html",
        action="store_true",
        help="Source is HTML already produced by the DocBook xhtml5 stylesheet",
    )
    parser.add_argument("--title", help="Document title (default: read from the document)")
    parser.add_argument(
        "--prefix-filenames",
        action="store_true",
        help="Prefix chapter filenames with their numbering",
    )
    parser.add_argument("--stylesheet", help="XSL stylesheet passed to xsltproc")
    parser.add_argument(
        "--keep-html",
        action="store_true",
        help="Keep the intermediate HTML written by xsltproc",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    source: Path = args.source
    if not source.is_file():
        logger.error("Source file not found: %s", source)
        return 2

    options = ConversionOptions(
        title=args.title,
        prefix_filenames=args.prefix_filenames,
        stylesheet=args.stylesheet,
        keep_intermediate=args.keep_html,
    )
    output_dir = args.output or source.resolve().parent / source.stem

    try:
        result = asyncio.run(_run(source, output_dir, options, from_html=args.html))
    except Docbook2mdError as exc:
        logger.error("Conversion failed: %s", exc)
        return 1

    print(result.summary)
    return 0


async def _run(
    source: Path, output_dir: Path, options: ConversionOptions, *, from_html: bool
) -> ConversionResult:
    if from_html:
        result = await convert_html_file(source, options=options)
    else:
        result = await convert_docbook(source, options=options)
    await write_book(result, output_dir)
    return result


if __name__ == "__main__":
    sys.exit(main())
