"""
Result merger.

Combines the per-chunk extraction texts into one report with a single extra
call. The request is assembled deterministically (labelled portions in chunk
order); the returned text is the final summary as-is. With one result there
is nothing to merge and no call is made.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .api_client import TokenUsage
from .exceptions import MergeError, SummarizationError
from .orchestrator import CompletionClient
from .prompts import MERGE_SYSTEM, PORTION_HEADER, get_merge_prompt

logger = logging.getLogger(__name__)


def build_merge_prompt(results: list[str]) -> str:
    """Label every chunk result with its portion number and wrap them in the merge prompt."""
    total = len(results)
    portions = "\n\n".join(
        f"{PORTION_HEADER.format(index=i, total=total)}\n{text.strip()}"
        for i, text in enumerate(results, start=1)
    )
    return get_merge_prompt(portions, total)


async def merge_results(
    client: CompletionClient,
    results: list[str],
    call_timeout: Optional[float] = None,
    usage: Optional[TokenUsage] = None,
) -> str:
    """
    Merge chunk results into the final summary.

    Raises:
        ValueError: No results were given
        MergeError: The merge call failed
    """
    if not results:
        raise ValueError("Nothing to merge")
    if len(results) == 1:
        return results[0]

    prompt = build_merge_prompt(results)
    logger.info(f"Merging {len(results)} chunk summaries ({len(prompt)} chars)")

    try:
        response = await asyncio.wait_for(
            client.complete(MERGE_SYSTEM, prompt, usage=usage),
            timeout=call_timeout,
        )
    except (SummarizationError, asyncio.TimeoutError) as exc:
        raise MergeError(len(results), original_error=exc) from exc

    return response.content
