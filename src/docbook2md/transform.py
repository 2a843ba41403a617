"""Run the DocBook XSL stylesheet on a DocBook source file."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

from docbook2md.config import (
    DOCBOOK2MD_KEEP_INTERMEDIATE,
    DOCBOOK2MD_STYLESHEET,
    DOCBOOK2MD_XSLTPROC,
)
from docbook2md.exceptions import TransformError

logger = logging.getLogger(__name__)

# Written next to the output by the xhtml5 stylesheet.
GENERATED_STYLESHEET = "docbook.css"


def intermediate_html_path(source_path: Path, title: str | None = None) -> Path:
    """Path of the HTML file written next to the DocBook source."""
    stem = title or source_path.stem
    return source_path.resolve().parent / f"{stem}.html"


def transform_docbook_to_html(
    source_path: Path,
    *,
    stylesheet: str | None = None,
    keep_intermediate: bool | None = None,
    output_path: Path | None = None,
) -> str:
    """Convert a DocBook XML file to HTML5 with xsltproc (sync version).

    Args:
        source_path: Path to the DocBook XML document.
        stylesheet: XSL stylesheet path or URI. Defaults to the configured
            DocBook ``xhtml5/docbook.xsl``.
        keep_intermediate: Keep the generated HTML and CSS files on disk.
        output_path: Where xsltproc writes the HTML. Defaults to
            :func:`intermediate_html_path`.

    Returns:
        The generated HTML document.

    Raises:
        TransformError: If xsltproc is missing, exits with a non-zero code,
            or its output cannot be read.
    """
    if keep_intermediate is None:
        keep_intermediate = DOCBOOK2MD_KEEP_INTERMEDIATE
    output = (output_path or intermediate_html_path(source_path)).resolve()
    # xsltproc runs from the output directory, so local paths must be absolute.
    source = source_path.resolve()
    stylesheet = _resolve_stylesheet(stylesheet or DOCBOOK2MD_STYLESHEET)

    logger.info("Converting DocBook to HTML...")
    try:
        result = subprocess.run(
            [
                DOCBOOK2MD_XSLTPROC,
                "--output",
                str(output),
                stylesheet,
                str(source),
            ],
            cwd=output.parent,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise TransformError(
            f"{DOCBOOK2MD_XSLTPROC} is required to convert DocBook files"
        ) from exc

    if result.stdout:
        logger.info(result.stdout.strip())
    if result.stderr:
        logger.debug(result.stderr.strip())

    if result.returncode != 0:
        raise TransformError(f"xsltproc failed with exit code {result.returncode}")

    try:
        html = output.read_text(encoding="utf-8")
    except OSError as exc:
        raise TransformError(f"Cannot read xsltproc output {output}: {exc}") from exc
    finally:
        if not keep_intermediate:
            _remove_intermediate_files(output)

    return html


def _resolve_stylesheet(stylesheet: str) -> str:
    if re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]+://", stylesheet):
        return stylesheet
    return str(Path(stylesheet).resolve())


def _remove_intermediate_files(output: Path) -> None:
    for path in (output, output.parent / GENERATED_STYLESHEET):
        path.unlink(missing_ok=True)
