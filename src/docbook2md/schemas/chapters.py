"""Chapter output records."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChapterRecord(BaseModel):
    """A chapter of the outline, with relations expressed as ids."""

    id: str
    type: str
    title: str
    level: int = Field(..., ge=0)
    num: int = Field(..., ge=1)
    content: str = ""
    parent_id: str | None = None
    children_ids: list[str] = Field(default_factory=list)
    previous_id: str | None = None
    next_id: str | None = None
    filename: str | None = None
    markdown: str | None = None


class FrontMatterRecord(BaseModel):
    """Content that precedes the first outline entry."""

    title: str
    content: str = ""
    filename: str = "README.md"
    markdown: str | None = None
