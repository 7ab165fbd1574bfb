"""
Keyword location and section grouping.

Specification books print the section name in the page footer
("UNIT MASONRY 04 20 00 - 7"). Pages are scanned in order; each page whose
footer band contains the keyword is a match, and every run of consecutive
matching pages becomes one Section.
"""

from __future__ import annotations

import logging
from typing import Optional

import fitz  # PyMuPDF

from .config import ReaderConfig
from .exceptions import KeywordNotFoundError
from .models import PageMatch, Section
from .text_extractor import TextExtractor

logger = logging.getLogger(__name__)


class SectionFinder:
    def __init__(
        self,
        config: Optional[ReaderConfig] = None,
        text_extractor: Optional[TextExtractor] = None,
    ):
        self.config = config or ReaderConfig()
        self.text_extractor = text_extractor or TextExtractor()

    def find(self, doc: fitz.Document) -> tuple[list[PageMatch], list[Section]]:
        """
        Scan all pages and group matches into sections.

        Returns:
            (relevant_pages, sections), both in page order

        Raises:
            KeywordNotFoundError: No page footer carries the keyword
        """
        keyword = self.config.keyword
        matches: list[PageMatch] = []
        runs: list[list[int]] = []
        current: list[int] = []

        for page_number in range(1, doc.page_count + 1):
            footer = self.text_extractor.region_text(
                doc, page_number, self.config.footer_fraction
            )
            if self._contains(footer, keyword):
                matches.append(PageMatch(page_number=page_number, matches=[keyword]))
                current.append(page_number)
                continue

            if current:
                runs.append(current)
                current = []
                if self.config.stop_after_first_run:
                    break

        if current:
            runs.append(current)

        if not runs:
            raise KeywordNotFoundError(keyword, doc.page_count)

        sections = [
            Section(title=keyword, start_page=run[0], end_page=run[-1], pages=run)
            for run in runs
        ]
        logger.info(
            f'Found "{keyword}" on {len(matches)} page(s) in {len(sections)} section(s)'
        )
        return matches, sections

    def _contains(self, text: str, keyword: str) -> bool:
        if self.config.case_sensitive:
            return keyword in text
        return keyword.lower() in text.lower()
