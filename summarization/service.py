from __future__ import annotations

import logging
from typing import Optional

from chunking import DocumentChunker

from .api_client import SummaryAPIClient, TokenUsage
from .config import SummarizationConfig
from .exceptions import InputValidationError
from .merger import merge_results
from .models import SummaryResult
from .orchestrator import CompletionClient, extract_chunks

logger = logging.getLogger(__name__)


class SummaryPipeline:
    """Split -> concurrent chunk extraction -> merge (skipped for one chunk)."""

    def __init__(
        self,
        client: CompletionClient,
        chunker: Optional[DocumentChunker] = None,
        call_timeout: Optional[float] = None,
        model: str = "gpt-4o",
    ):
        self.client = client
        self.chunker = chunker or DocumentChunker()
        self.call_timeout = call_timeout
        self.model = model

    async def run(self, text: str) -> SummaryResult:
        usage = TokenUsage()
        plan = self.chunker.chunk(text)

        chunk_texts = await extract_chunks(
            self.client,
            plan.chunks,
            call_timeout=self.call_timeout,
            usage=usage,
        )
        summary = await merge_results(
            self.client,
            chunk_texts,
            call_timeout=self.call_timeout,
            usage=usage,
        )

        logger.info(
            f"Summary ready: {plan.total_chunks} chunk(s), "
            f"{usage.request_count} call(s), {usage.total_tokens} tokens"
        )
        return SummaryResult(
            summary=summary,
            chunk_count=plan.total_chunks,
            chunk_summaries=chunk_texts,
            merged=plan.total_chunks > 1,
            usage=usage.to_dict(self.model),
        )


class MaterialsService:
    def __init__(
        self,
        config: SummarizationConfig | None = None,
        client: CompletionClient | None = None,
    ):
        self.config = config or SummarizationConfig.from_env()
        self.client = client or SummaryAPIClient(
            api_key=self.config.api_key,
            model=self.config.model,
            max_tokens=self.config.max_output_tokens,
            temperature=self.config.temperature,
            max_retries=self.config.max_retries,
            retry_delay=self.config.retry_delay,
            timeout=self.config.call_timeout,
        )
        self.pipeline = SummaryPipeline(
            client=self.client,
            chunker=DocumentChunker(self.config.chunking_config(), model=self.config.model),
            call_timeout=self.config.chunk_budget,
            model=self.config.model,
        )

    async def extract_materials(self, section_text: Optional[str]) -> SummaryResult:
        if section_text is None or not section_text.strip():
            raise InputValidationError()
        return await self.pipeline.run(section_text)
