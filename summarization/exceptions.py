"""
Custom Exceptions for the Materials Summarization Pipeline.

Exception Hierarchy:
    SummarizationError (base)
    ├── InputValidationError
    ├── APIError
    │   ├── APIConnectionError
    │   ├── APITimeoutError
    │   ├── APIRateLimitError
    │   └── APIResponseError
    ├── ChunkExtractionError
    └── MergeError

ChunkExtractionError and MergeError keep the two upstream stages apart in
logs, even though the web layer shows the user one generic message.

Usage:
    from summarization.exceptions import ChunkExtractionError, MergeError

    try:
        result = await service.extract_materials(text)
    except ChunkExtractionError as e:
        print(f"Chunk {e.chunk_index}/{e.total_chunks} failed: {e}")
    except MergeError as e:
        print(f"Merge failed: {e}")
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class SummarizationError(Exception):
    """
    Base exception for all summarization errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A summarization error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


class InputValidationError(SummarizationError):
    """Raised when the section text is missing or blank. No API call is made."""

    def __init__(self, message: str = "Section text is required"):
        super().__init__(message)


# =============================================================================
# API ERRORS
# =============================================================================


class APIError(SummarizationError):
    """
    Base class for OpenAI API errors.

    Attributes:
        original_error: The underlying SDK exception
        status_code: HTTP status code if available
    """

    def __init__(
        self,
        message: str = "API error",
        original_error: Optional[Exception] = None,
        status_code: Optional[int] = None,
    ):
        self.original_error = original_error
        self.status_code = status_code

        details = None
        if original_error:
            details = str(original_error)
        if status_code:
            message = f"{message} (HTTP {status_code})"

        super().__init__(message, details)


class APIConnectionError(APIError):
    """Raised when the API cannot be reached (network, DNS)."""

    def __init__(
        self,
        message: str = "Cannot connect to OpenAI API",
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, original_error)


class APITimeoutError(APIError):
    """Raised when a call does not finish within its time budget."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        original_error: Optional[Exception] = None,
    ):
        self.timeout = timeout
        message = "OpenAI API call timed out"
        if timeout:
            message = f"{message} after {timeout}s"
        super().__init__(message, original_error)


class APIRateLimitError(APIError):
    """
    Raised when the API rate limit is exceeded after all retries.

    Attributes:
        retry_after: Suggested wait time in seconds (if provided by API)
    """

    def __init__(
        self,
        retry_after: Optional[float] = None,
        original_error: Optional[Exception] = None,
    ):
        self.retry_after = retry_after
        message = "OpenAI API rate limit exceeded"
        if retry_after:
            message = f"{message} (retry after {retry_after}s)"
        super().__init__(message, original_error, status_code=429)


class APIResponseError(APIError):
    """
    Raised when the API returns an unusable response.

    This includes:
    - No choices / no message in the completion
    - Content policy blocks

    Attributes:
        response_content: Raw response content if available
    """

    def __init__(
        self,
        message: str = "Invalid API response",
        response_content: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.response_content = response_content
        super().__init__(message, original_error)
        if response_content:
            self.details = response_content[:500]


# =============================================================================
# PIPELINE STAGE ERRORS
# =============================================================================


class ChunkExtractionError(SummarizationError):
    """
    Raised when the extraction call for one chunk fails.

    The whole operation fails: a summary silently missing a chunk's
    materials is never returned.

    Attributes:
        chunk_index: The failed chunk (1-based)
        total_chunks: Number of chunks in the request
        kind: Failure kind (transport, timeout, rate_limit, malformed)
        original_error: The underlying exception
    """

    def __init__(
        self,
        chunk_index: int,
        total_chunks: int,
        kind: str = "transport",
        original_error: Optional[Exception] = None,
    ):
        self.chunk_index = chunk_index
        self.total_chunks = total_chunks
        self.kind = kind
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(
            f"Extraction failed for chunk {chunk_index} of {total_chunks} ({kind})",
            details,
        )


class MergeError(SummarizationError):
    """
    Raised when the call combining per-chunk results fails.

    Attributes:
        portion_count: Number of per-chunk results that were being merged
        original_error: The underlying exception
    """

    def __init__(
        self,
        portion_count: int,
        original_error: Optional[Exception] = None,
    ):
        self.portion_count = portion_count
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(
            f"Failed to merge {portion_count} chunk summaries",
            details,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """
    Check if an error is potentially recoverable by retrying the same call.

    Returns True for connection errors, timeouts, rate limits and HTTP 5xx.
    """
    if isinstance(error, (APIConnectionError, APITimeoutError, APIRateLimitError)):
        return True
    if isinstance(error, APIError) and error.status_code is not None and error.status_code >= 500:
        return True
    return False


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        if getattr(current, "original_error", None):
            current = current.original_error
            depth += 1
        elif current.__cause__:
            current = current.__cause__
            depth += 1
        else:
            break

    return "\n".join(lines)
