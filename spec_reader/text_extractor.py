"""
Text-native PDF reading utilities.

Opens uploaded bytes with PyMuPDF and exposes page text as positioned
line-level fragments, so callers can read a sub-region of a page (the footer
band where specification section names are printed) or the whole page.
"""

from __future__ import annotations

import logging
import re

import fitz  # PyMuPDF

from .exceptions import PDFCorruptedError, PageTextError, UnsupportedFileError
from .models import TextFragment

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"


def open_pdf(data: bytes, filename: str = "upload.pdf") -> fitz.Document:
    """
    Open PDF bytes.

    Raises:
        UnsupportedFileError: Empty upload or not a PDF
        PDFCorruptedError: PyMuPDF cannot parse the file
    """
    if not data:
        raise UnsupportedFileError(filename, "Uploaded file is empty")
    if PDF_MAGIC not in data[:1024]:
        raise UnsupportedFileError(filename)

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        raise PDFCorruptedError(filename, exc) from exc

    if doc.page_count == 0:
        doc.close()
        raise PDFCorruptedError(filename, ValueError("PDF has no pages"))

    logger.info(f"Opened {filename}: {doc.page_count} pages")
    return doc


class TextExtractor:
    def __init__(self, sort_fragments: bool = True) -> None:
        self.sort_fragments = sort_fragments

    def page_fragments(self, doc: fitz.Document, page_number: int) -> list[TextFragment]:
        """Return the text lines of a page (1-indexed) with their bounding boxes."""
        page = self._load_page(doc, page_number)
        try:
            layout = page.get_text("dict")
        except RuntimeError as exc:
            raise PageTextError(page_number, doc.page_count, exc) from exc

        fragments: list[TextFragment] = []
        for block in layout.get("blocks", []):
            if block.get("type", 0) != 0:
                continue  # skip image blocks
            for line in block.get("lines", []):
                text = "".join(span.get("text", "") for span in line.get("spans", []))
                if not text.strip():
                    continue
                x0, y0, x1, y1 = line["bbox"]
                fragments.append(TextFragment(text=text.strip(), x0=x0, y0=y0, x1=x1, y1=y1))

        if self.sort_fragments:
            fragments.sort(key=lambda f: (round(f.y0, 1), f.x0))
        return fragments

    def region_text(self, doc: fitz.Document, page_number: int, bottom_fraction: float) -> str:
        """Text of the fragments in the bottom `bottom_fraction` of a page."""
        page_height = self._load_page(doc, page_number).rect.height
        fragments = self.page_fragments(doc, page_number)
        selected = [f.text for f in fragments if f.in_bottom_region(page_height, bottom_fraction)]
        return self._normalize(" ".join(selected))

    def page_text(self, doc: fitz.Document, page_number: int) -> str:
        """Full text of a page, fragments joined by single spaces."""
        fragments = self.page_fragments(doc, page_number)
        return " ".join(f.text for f in fragments)

    def pages_text(self, doc: fitz.Document, pages: list[int]) -> str:
        """
        Text of several pages, each introduced by a page marker.

        Pages are separated by a blank line, which the chunker treats as a
        paragraph break.
        """
        parts = []
        for page_number in pages:
            parts.append(f"--- Page {page_number} ---\n{self.page_text(doc, page_number)}\n")
        return "\n".join(parts)

    @staticmethod
    def _load_page(doc: fitz.Document, page_number: int) -> fitz.Page:
        if page_number < 1 or page_number > doc.page_count:
            raise PageTextError(page_number, doc.page_count)
        try:
            return doc.load_page(page_number - 1)
        except (RuntimeError, ValueError) as exc:
            raise PageTextError(page_number, doc.page_count, exc) from exc

    @staticmethod
    def _normalize(text: str) -> str:
        return re.sub(r"\s+", " ", text).strip()
