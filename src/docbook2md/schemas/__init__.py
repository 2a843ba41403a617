"""Shared schemas for docbook2md."""

from docbook2md.schemas.chapters import ChapterRecord, FrontMatterRecord
from docbook2md.schemas.conversion import ConversionResult

__all__ = ["ChapterRecord", "ConversionResult", "FrontMatterRecord"]
