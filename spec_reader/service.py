from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Optional

from .config import ReaderConfig
from .document_store import DocumentStore
from .exceptions import PageTextError
from .models import DocumentScan, Section
from .section_finder import SectionFinder
from .text_extractor import TextExtractor, open_pdf

logger = logging.getLogger(__name__)


class SpecReaderService:
    def __init__(
        self,
        config: ReaderConfig | None = None,
        store: DocumentStore | None = None,
    ):
        self.config = config or ReaderConfig()
        self.store = store or DocumentStore(ttl_seconds=self.config.session_ttl_seconds)
        self.text_extractor = TextExtractor()
        self.finder = SectionFinder(self.config, self.text_extractor)

    def process_upload(
        self,
        data: bytes,
        filename: str,
        session_id: Optional[str] = None,
    ) -> DocumentScan:
        """Open an upload, locate keyword sections and keep the document for the session."""
        if session_id:
            # A new upload invalidates whatever the session held, even if it fails.
            self.store.discard(session_id)
        session_id = session_id or uuid.uuid4().hex

        doc = open_pdf(data, filename)
        try:
            matches, sections = self.finder.find(doc)
        except Exception:
            doc.close()
            raise

        scan = DocumentScan(
            session_id=session_id,
            filename=filename,
            total_pages=doc.page_count,
            keyword=self.config.keyword,
            relevant_pages=matches,
            sections=sections,
        )
        self.store.put(session_id, filename, doc, scan)
        return scan

    def process_file(self, pdf_path: str | Path, session_id: Optional[str] = None) -> DocumentScan:
        path = Path(pdf_path)
        return self.process_upload(path.read_bytes(), path.name, session_id=session_id)

    def get_scan(self, session_id: str) -> DocumentScan:
        return self.store.get(session_id).scan

    def get_section(self, session_id: str, index: int) -> Section:
        return self.get_scan(session_id).get_section(index)

    def extract_section_text(self, session_id: str, pages: list[int]) -> str:
        """Re-extract the text of the given pages from the session's document."""
        entry = self.store.get(session_id)
        with entry.lock:
            if entry.document.is_closed:
                raise PageTextError(pages[0] if pages else 0)
            text = self.text_extractor.pages_text(entry.document, pages)
        logger.info(f"Extracted {len(text)} chars from pages {pages[:1]}..{pages[-1:]}")
        return text

    def close_session(self, session_id: str) -> bool:
        return self.store.discard(session_id)
