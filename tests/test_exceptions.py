"""
Tests for reader and summarization exceptions.
"""

import pytest

from spec_reader import (
    SpecReaderError,
    PDFError,
    PDFCorruptedError,
    UnsupportedFileError,
    SourceExtractionError,
    KeywordNotFoundError,
    PageTextError,
    DocumentNotLoadedError,
)
from summarization import (
    SummarizationError,
    InputValidationError,
    APIError,
    APIConnectionError,
    APITimeoutError,
    APIRateLimitError,
    APIResponseError,
    ChunkExtractionError,
    MergeError,
    is_retryable,
    format_error_chain,
)


class TestSpecReaderError:
    """Tests for base SpecReaderError."""

    def test_create_simple(self):
        """Test creating error with message only."""
        error = SpecReaderError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.details is None

    def test_create_with_details(self):
        """Test creating error with details."""
        error = SpecReaderError("Error occurred", details="More info here")
        assert "Error occurred" in str(error)
        assert "More info here" in str(error)
        assert error.details == "More info here"


class TestPDFErrors:
    """Tests for PDF-related errors."""

    def test_pdf_corrupted(self):
        """Test PDFCorruptedError."""
        original = ValueError("Invalid PDF structure")
        error = PDFCorruptedError("broken.pdf", original)
        assert error.path == "broken.pdf"
        assert error.original_error == original
        assert "corrupted" in str(error).lower()
        assert isinstance(error, PDFError)

    def test_unsupported_file(self):
        """Test UnsupportedFileError default reason."""
        error = UnsupportedFileError("notes.txt")
        assert "Only PDF files are supported" in error.message
        assert "notes.txt" in str(error)


class TestSourceErrors:
    """Tests for section location errors."""

    def test_keyword_not_found(self):
        """Test KeywordNotFoundError message."""
        error = KeywordNotFoundError("UNIT MASONRY", total_pages=40)
        assert error.message == 'Keyword "UNIT MASONRY" not found in PDF.'
        assert error.total_pages == 40
        assert isinstance(error, SourceExtractionError)

    def test_page_text_error(self):
        """Test PageTextError with page count."""
        error = PageTextError(page_number=12, total_pages=10)
        assert error.page_number == 12
        assert "12" in str(error)
        assert "10 pages" in str(error)

    def test_document_not_loaded(self):
        """Test DocumentNotLoadedError."""
        error = DocumentNotLoadedError("abc123")
        assert error.session_id == "abc123"
        assert error.message == "PDF not loaded. Please upload the PDF first."


class TestSummarizationErrors:
    """Tests for summarization errors."""

    def test_input_validation(self):
        """Test default message of InputValidationError."""
        error = InputValidationError()
        assert error.message == "Section text is required"
        assert isinstance(error, SummarizationError)

    def test_api_error_with_status(self):
        """Test APIError carries status code."""
        error = APIError("Bad gateway", status_code=502)
        assert error.status_code == 502
        assert "502" in str(error)

    def test_timeout_error(self):
        """Test APITimeoutError."""
        error = APITimeoutError(timeout=30)
        assert error.timeout == 30
        assert "30" in str(error)

    def test_rate_limit_error(self):
        """Test APIRateLimitError."""
        error = APIRateLimitError(retry_after=60)
        assert error.retry_after == 60
        assert error.status_code == 429

    def test_response_error_keeps_content(self):
        """Test APIResponseError truncates raw content into details."""
        error = APIResponseError("Blocked", response_content="x" * 1000)
        assert len(error.details) == 500

    def test_chunk_extraction_error(self):
        """Test ChunkExtractionError names the chunk."""
        cause = APIConnectionError()
        error = ChunkExtractionError(2, 3, kind="transport", original_error=cause)
        assert error.chunk_index == 2
        assert error.total_chunks == 3
        assert error.kind == "transport"
        assert "chunk 2 of 3" in str(error)

    def test_merge_error(self):
        """Test MergeError."""
        error = MergeError(4, original_error=APITimeoutError(10))
        assert error.portion_count == 4
        assert "4" in error.message


class TestIsRetryable:
    """Tests for is_retryable helper."""

    @pytest.mark.parametrize("error", [
        APIConnectionError(),
        APITimeoutError(30),
        APIRateLimitError(),
        APIError("Server error", status_code=503),
        APIError("Origin error", status_code=520),
    ])
    def test_retryable(self, error):
        assert is_retryable(error) is True

    @pytest.mark.parametrize("error", [
        APIError("Bad request", status_code=400),
        APIResponseError("Blocked"),
        InputValidationError(),
        ValueError("other"),
    ])
    def test_not_retryable(self, error):
        assert is_retryable(error) is False


class TestFormatErrorChain:
    """Tests for format_error_chain helper."""

    def test_single_error(self):
        result = format_error_chain(ValueError("plain"))
        assert result == "ValueError: plain"

    def test_follows_original_error(self):
        inner = APIConnectionError("Cannot connect")
        outer = ChunkExtractionError(1, 2, original_error=inner)
        result = format_error_chain(outer)
        lines = result.split("\n")
        assert lines[0].startswith("ChunkExtractionError")
        assert "APIConnectionError" in lines[1]

    def test_follows_cause(self):
        try:
            try:
                raise KeyError("missing")
            except KeyError as exc:
                raise RuntimeError("wrapped") from exc
        except RuntimeError as error:
            result = format_error_chain(error)
        assert "RuntimeError" in result
        assert "KeyError" in result
