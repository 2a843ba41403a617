"""docbook2md: split DocBook documents into Markdown chapters."""

from docbook2md.chapters import Chapter, FrontMatter
from docbook2md.exceptions import (
    ConversionError,
    Docbook2mdError,
    ParseError,
    TransformError,
)
from docbook2md.html_parser import ParsedDocbookHtml, parse_docbook_html
from docbook2md.ingestion import (
    ConversionOptions,
    convert_docbook,
    convert_html,
    convert_html_file,
    write_book,
)
from docbook2md.schemas import ChapterRecord, ConversionResult, FrontMatterRecord
from docbook2md.toc import DocumentOutline, split_document

__all__ = [
    "Chapter",
    "ChapterRecord",
    "ConversionError",
    "ConversionOptions",
    "ConversionResult",
    "Docbook2mdError",
    "DocumentOutline",
    "FrontMatter",
    "FrontMatterRecord",
    "ParseError",
    "ParsedDocbookHtml",
    "TransformError",
    "convert_docbook",
    "convert_html",
    "convert_html_file",
    "parse_docbook_html",
    "split_document",
    "write_book",
]
