"""Tests for the conversion pipeline."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from docbook2md.exceptions import ConversionError, TransformError
from docbook2md.ingestion import (
    ConversionOptions,
    convert_docbook,
    convert_html,
    convert_html_file,
    write_book,
)


class TestConvertHtml:
    """Tests for convert_html on a stylesheet-shaped book."""

    def test_assigns_filenames(self, book_html: str) -> None:
        result = convert_html(book_html)

        assert [c.filename for c in result.chapters] == [
            "preface.md",
            "1-installing.md",
            "1-1-requirements.md",
            "1-2-steps.md",
            "a-reference.md",
        ]
        assert result.front_matter.filename == "README.md"

    def test_prefixed_filenames(self, book_html: str) -> None:
        result = convert_html(book_html, options=ConversionOptions(prefix_filenames=True))

        assert [c.filename for c in result.chapters] == [
            "1-preface.md",
            "2-1-installing.md",
            "2-1-1-1-requirements.md",
            "2-2-1-2-steps.md",
            "3-a-reference.md",
        ]

    def test_renders_markdown(self, book_html: str) -> None:
        """Chapters become Markdown and links follow their target file."""
        result = convert_html(book_html)
        by_id = {c.id: c for c in result.chapters}

        assert by_id["pref"].markdown == (
            "## Preface\n\nRead [the steps](1-2-steps.md#sec-steps).\n"
        )
        assert by_id["ch-install"].markdown.startswith("## 1. Installing {#ch-install}\n")
        assert "```\nmake install\n```" in by_id["sec-steps"].markdown
        assert "Done[^[1]](#ftn.f1)." in by_id["sec-steps"].markdown
        assert "###### Example A.1. Config {#ex-conf}" in by_id["app-a"].markdown

    def test_front_matter_has_single_title(self, book_html: str) -> None:
        """The title page heading is not repeated."""
        result = convert_html(book_html)

        markdown = result.front_matter.markdown
        assert markdown.startswith("# User Guide\n")
        assert markdown.count("# User Guide") == 1
        assert "Welcome to the guide." in markdown

    def test_front_matter_gets_title_heading(self) -> None:
        """Without a title page the document title becomes the heading."""
        result = convert_html("<p>Hello</p>", options=ConversionOptions(title="Notes"))

        assert result.front_matter.markdown == "# Notes\n\nHello\n"

    def test_summary_file(self, book_html: str) -> None:
        result = convert_html(book_html)

        assert result.toc == (
            "# Summary\n"
            "\n"
            "* [User Guide](README.md)\n"
            "* [Preface](preface.md)\n"
            "* [1. Installing](1-installing.md)\n"
            "    * [1.1. Requirements](1-1-requirements.md)\n"
            "    * [1.2. Steps](1-2-steps.md)\n"
            "* [A. Reference](a-reference.md)\n"
        )
        assert result.summary.startswith("Title: User Guide\nChapters: 5")

    def test_skips_markdown_when_disabled(self, book_html: str) -> None:
        result = convert_html(book_html, options=ConversionOptions(render_markdown=False))

        assert all(c.markdown is None for c in result.chapters)
        assert result.front_matter.markdown is None
        assert result.chapters[0].content.startswith('<div class="preface" id="pref">')


class TestConvertDocbook:
    """Tests for convert_docbook with xsltproc mocked out."""

    @pytest.mark.asyncio
    async def test_transforms_then_splits(self, tmp_path: Path, book_html: str) -> None:
        source = tmp_path / "guide.xml"
        options = ConversionOptions(stylesheet="custom.xsl", keep_intermediate=True)

        with patch(
            "docbook2md.ingestion.transform_docbook_to_html", return_value=book_html
        ) as mock_transform:
            result = await convert_docbook(source, options=options)

        mock_transform.assert_called_once_with(
            source, stylesheet="custom.xsl", keep_intermediate=True
        )
        assert result.title == "User Guide"
        assert len(result.chapters) == 5

    @pytest.mark.asyncio
    async def test_title_falls_back_to_source_name(self, tmp_path: Path) -> None:
        with patch(
            "docbook2md.ingestion.transform_docbook_to_html", return_value="<p>x</p>"
        ):
            result = await convert_docbook(tmp_path / "guide.xml")

        assert result.title == "guide"

    @pytest.mark.asyncio
    async def test_propagates_transform_errors(self, tmp_path: Path) -> None:
        with patch(
            "docbook2md.ingestion.transform_docbook_to_html",
            side_effect=TransformError("xsltproc failed with exit code 1"),
        ):
            with pytest.raises(TransformError):
                await convert_docbook(tmp_path / "guide.xml")


class TestConvertHtmlFile:
    """Tests for convert_html_file."""

    @pytest.mark.asyncio
    async def test_reads_file(self, tmp_path: Path, book_html: str) -> None:
        path = tmp_path / "guide.html"
        path.write_text(book_html, encoding="utf-8")

        result = await convert_html_file(path)

        assert result.title == "User Guide"
        assert result.chapters[0].id == "pref"


class TestWriteBook:
    """Tests for write_book."""

    @pytest.mark.asyncio
    async def test_writes_every_file(self, tmp_path: Path, book_html: str) -> None:
        result = convert_html(book_html)
        output_dir = tmp_path / "out"

        written = await write_book(result, output_dir)

        names = sorted(path.name for path in written)
        assert names == sorted(
            [
                "README.md",
                "SUMMARY.md",
                "preface.md",
                "1-installing.md",
                "1-1-requirements.md",
                "1-2-steps.md",
                "a-reference.md",
            ]
        )
        assert (output_dir / "SUMMARY.md").read_text(encoding="utf-8") == result.toc

    @pytest.mark.asyncio
    async def test_wraps_os_errors(self, tmp_path: Path) -> None:
        """An output path that is a file gives a ConversionError."""
        blocker = tmp_path / "out"
        blocker.write_text("not a directory", encoding="utf-8")
        result = convert_html("<p>x</p>")

        with pytest.raises(ConversionError, match="Cannot write output"):
            await write_book(result, blocker)
