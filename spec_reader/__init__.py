"""
Spec Reader - Section location in construction specification PDFs

Reads uploaded specification books with PyMuPDF, finds the pages whose
footer carries a section keyword (default "UNIT MASONRY"), groups them into
sections and keeps the opened document per session so section text can be
extracted on demand.

Quick Start:
    from spec_reader import SpecReaderService

    reader = SpecReaderService()
    scan = reader.process_file("project_specs.pdf")

    for section in scan.sections:
        print(section.display_name)

    text = reader.extract_section_text(scan.session_id, scan.sections[0].pages)
"""

__version__ = "1.0.0"

from .config import ReaderConfig
from .document_store import DocumentStore, StoredDocument
from .models import DocumentScan, PageMatch, Section, TextFragment
from .section_finder import SectionFinder
from .service import SpecReaderService
from .text_extractor import TextExtractor, open_pdf
from .exceptions import (
    SpecReaderError,
    PDFError,
    PDFCorruptedError,
    UnsupportedFileError,
    SourceExtractionError,
    KeywordNotFoundError,
    PageTextError,
    DocumentNotLoadedError,
)

__all__ = [
    "__version__",
    "ReaderConfig",
    "DocumentStore",
    "StoredDocument",
    "DocumentScan",
    "PageMatch",
    "Section",
    "TextFragment",
    "SectionFinder",
    "SpecReaderService",
    "TextExtractor",
    "open_pdf",
    "SpecReaderError",
    "PDFError",
    "PDFCorruptedError",
    "UnsupportedFileError",
    "SourceExtractionError",
    "KeywordNotFoundError",
    "PageTextError",
    "DocumentNotLoadedError",
]
