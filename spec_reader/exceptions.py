"""
Custom Exceptions for reading construction specification PDFs.

Exception Hierarchy:
    SpecReaderError (base)
    ├── PDFError
    │   ├── PDFCorruptedError
    │   └── UnsupportedFileError
    └── SourceExtractionError
        ├── KeywordNotFoundError
        ├── PageTextError
        └── DocumentNotLoadedError

Source errors are about the document itself and are kept apart from
network/upstream failures in the summarization package.

Usage:
    from spec_reader.exceptions import KeywordNotFoundError

    try:
        scan = reader.process_upload(data, "specs.pdf")
    except KeywordNotFoundError as e:
        print(f"No '{e.keyword}' pages in {e.total_pages} pages")
"""

from __future__ import annotations

from typing import Optional


class SpecReaderError(Exception):
    """
    Base exception for all PDF reading errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A PDF reading error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


# =============================================================================
# PDF ERRORS
# =============================================================================


class PDFError(SpecReaderError):
    """Base class for PDF-related errors."""

    def __init__(
        self,
        message: str = "PDF error",
        path: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.path = path
        if path:
            message = f"{message} [{path}]"
        super().__init__(message, details)


class PDFCorruptedError(PDFError):
    """
    Raised when the uploaded bytes cannot be opened as a PDF.

    Attributes:
        path: File name of the upload
        original_error: The underlying error from PyMuPDF
    """

    def __init__(
        self,
        path: str,
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(
            message="PDF file is corrupted or unreadable",
            path=path,
            details=details,
        )


class UnsupportedFileError(PDFError):
    """Raised when an upload is empty or is not a PDF."""

    def __init__(self, path: str, reason: str = "Only PDF files are supported"):
        super().__init__(message=reason, path=path)


# =============================================================================
# SOURCE EXTRACTION ERRORS
# =============================================================================


class SourceExtractionError(SpecReaderError):
    """Base class for failures locating or reading section text."""

    pass


class KeywordNotFoundError(SourceExtractionError):
    """
    Raised when no page footer carries the keyword.

    Attributes:
        keyword: The keyword that was searched
        total_pages: Number of pages scanned
    """

    def __init__(self, keyword: str, total_pages: int = 0):
        self.keyword = keyword
        self.total_pages = total_pages
        super().__init__(f'Keyword "{keyword}" not found in PDF.')


class PageTextError(SourceExtractionError):
    """
    Raised when a requested page's text cannot be retrieved.

    Attributes:
        page_number: The requested page (1-indexed)
        total_pages: Pages in the document
    """

    def __init__(
        self,
        page_number: int,
        total_pages: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.page_number = page_number
        self.total_pages = total_pages
        self.original_error = original_error
        message = f"Cannot read text of page {page_number}"
        if total_pages is not None:
            message = f"{message} (document has {total_pages} pages)"
        details = str(original_error) if original_error else None
        super().__init__(message, details)


class DocumentNotLoadedError(SourceExtractionError):
    """
    Raised when a session has no loaded PDF (never uploaded, closed or expired).

    Attributes:
        session_id: The session that was looked up
    """

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__("PDF not loaded. Please upload the PDF first.", details=f"session {session_id}")
