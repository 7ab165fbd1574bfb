"""
Data Models for reading construction specification PDFs.

Flow:
    PDF bytes → [TextExtractor] → TextFragment[] per page
                        ↓
           [SectionFinder] → PageMatch[] → Section[]
                        ↓
                   DocumentScan (returned to the client, kept in the session store)

Coordinates follow PyMuPDF: origin at the top-left of the page, y grows
downward, so the footer region is the band with the largest y values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, computed_field, model_validator


@dataclass(frozen=True)
class TextFragment:
    """One line of page text with its bounding box."""

    text: str
    x0: float
    y0: float
    x1: float
    y1: float

    def in_bottom_region(self, page_height: float, fraction: float) -> bool:
        """True if the fragment's baseline lies in the bottom `fraction` of the page."""
        return page_height * (1.0 - fraction) <= self.y1 <= page_height


class PageMatch(BaseModel):
    """A page whose footer carries the keyword."""

    page_number: int = Field(..., ge=1, description="1-indexed page number")
    matches: list[str] = Field(default_factory=list)


class Section(BaseModel):
    """
    A run of consecutive pages sharing the keyword.

    Examples:
        - {"title": "UNIT MASONRY", "start_page": 212, "end_page": 219}
    """

    title: str
    start_page: int = Field(..., ge=1)
    end_page: int = Field(..., ge=1)
    pages: list[int] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def fill_pages(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("pages"):
            start, end = data.get("start_page"), data.get("end_page")
            if isinstance(start, int) and isinstance(end, int):
                data = {**data, "pages": list(range(start, end + 1))}
        return data

    @model_validator(mode="after")
    def validate_page_range(self) -> "Section":
        if self.end_page < self.start_page:
            raise ValueError(
                f"end_page ({self.end_page}) must be >= start_page ({self.start_page})"
            )
        return self

    @computed_field
    @property
    def display_name(self) -> str:
        return f"{self.title} (Pages {self.start_page}-{self.end_page})"


class DocumentScan(BaseModel):
    """Result of scanning one uploaded PDF."""

    session_id: str
    filename: str
    total_pages: int = Field(..., ge=0)
    keyword: str
    relevant_pages: list[PageMatch] = Field(default_factory=list)
    sections: list[Section] = Field(default_factory=list)

    def get_section(self, index: int) -> Section:
        if index < 0 or index >= len(self.sections):
            raise IndexError(f"Section {index} out of range (0-{len(self.sections) - 1})")
        return self.sections[index]
