"""
Per-chunk extraction orchestrator.

Each chunk becomes one independent extraction call. Calls run concurrently
as one asyncio task per chunk; results are collected behind a barrier and
put back into chunk order by index, whatever order they finish in.

The first failed chunk fails the whole operation: the remaining in-flight
calls are cancelled and a ChunkExtractionError is raised. A call that
succeeds with empty content contributes "".
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from chunking import Chunk

from .api_client import APIResponse, TokenUsage
from .exceptions import SummarizationError
from .prompts import (
    EXTRACTION_SYSTEM,
    get_chunk_extraction_prompt,
    get_single_shot_prompt,
)
from .result import ChunkOutcome, Err, Ok, classify_error

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: Optional[int] = None,
        usage: Optional[TokenUsage] = None,
    ) -> APIResponse:
        ...


async def extract_chunk(
    client: CompletionClient,
    chunk: Chunk,
    call_timeout: Optional[float] = None,
    usage: Optional[TokenUsage] = None,
) -> ChunkOutcome:
    """Run the extraction call for one chunk and wrap the outcome."""
    if chunk.total == 1:
        prompt = get_single_shot_prompt(chunk.text, chunk.label)
    else:
        prompt = get_chunk_extraction_prompt(chunk.text, chunk.label)

    try:
        response = await asyncio.wait_for(
            client.complete(EXTRACTION_SYSTEM, prompt, usage=usage),
            timeout=call_timeout,
        )
    except (SummarizationError, asyncio.TimeoutError) as exc:
        kind = classify_error(exc)
        logger.warning(f"Chunk {chunk.label} failed ({kind}): {exc}")
        return Err(index=chunk.index, kind=kind, error=exc)

    if not response.content:
        logger.info(f"Chunk {chunk.label} returned no content")
    return Ok(index=chunk.index, text=response.content)


async def extract_chunks(
    client: CompletionClient,
    chunks: list[Chunk],
    call_timeout: Optional[float] = None,
    usage: Optional[TokenUsage] = None,
) -> list[str]:
    """
    Extract every chunk concurrently and return the texts in chunk order.

    Args:
        client: Completion client (SummaryAPIClient or compatible)
        chunks: Chunks in source order
        call_timeout: Time budget per call in seconds (None = SDK timeout only)
        usage: Optional tracker for this run

    Returns:
        One extraction text per chunk, ordered like `chunks`

    Raises:
        ChunkExtractionError: A chunk's call failed; nothing partial is returned
    """
    if not chunks:
        return []

    total = len(chunks)
    logger.info(f"Dispatching {total} chunk extraction call(s)")

    tasks = [
        asyncio.create_task(
            extract_chunk(client, chunk, call_timeout=call_timeout, usage=usage),
            name=f"extract-chunk-{chunk.index}",
        )
        for chunk in chunks
    ]

    results: dict[int, str] = {}
    try:
        for next_done in asyncio.as_completed(tasks):
            outcome = await next_done
            if isinstance(outcome, Err):
                raise outcome.to_exception(total) from outcome.error
            results[outcome.index] = outcome.text
    finally:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.info(f"Cancelled {len(pending)} in-flight chunk call(s)")

    return [results[chunk.index] for chunk in chunks]
