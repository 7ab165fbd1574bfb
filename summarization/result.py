"""Tagged outcome of one chunk extraction call.

Text crosses stage boundaries as opaque strings; failures travel as `Err`
values until the orchestrator turns the first one into an exception.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional, Union

from .exceptions import (
    APIRateLimitError,
    APIResponseError,
    APITimeoutError,
    ChunkExtractionError,
)


@dataclass(frozen=True)
class Ok:
    index: int
    text: str


@dataclass(frozen=True)
class Err:
    index: int
    kind: str
    error: Optional[Exception] = None

    def to_exception(self, total_chunks: int) -> ChunkExtractionError:
        return ChunkExtractionError(
            chunk_index=self.index,
            total_chunks=total_chunks,
            kind=self.kind,
            original_error=self.error,
        )


ChunkOutcome = Union[Ok, Err]


def classify_error(error: Exception) -> str:
    """Map an exception to an Err kind."""
    if isinstance(error, (APITimeoutError, asyncio.TimeoutError)):
        return "timeout"
    if isinstance(error, APIRateLimitError):
        return "rate_limit"
    if isinstance(error, APIResponseError):
        return "malformed"
    return "transport"
