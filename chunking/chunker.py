"""
Document Chunker - Boundary-aware character chunking for the summary pipeline

Takes the text of one specification section and produces overlapping chunks
that each fit the model's input budget.

Algorithm:
1. Text that fits in max_chunk_chars is returned as a single chunk (this is
   the common case; no overlap logic applies, empty text included).
2. Otherwise cut at start + max_chunk_chars. Before the last chunk, look back
   up to lookback_chars for a paragraph break ("\\n\\n"), then for a sentence
   end (". "), and snap the cut to just past it. Snapping only shortens.
3. The next chunk starts overlap_chars before the previous cut, always
   moving forward by at least one character.
4. The last chunk ends exactly at the end of the text.

Usage:
    from chunking import DocumentChunker, ChunkingConfig

    chunker = DocumentChunker(ChunkingConfig(max_chunk_chars=24_000, overlap_chars=2_000))
    result = chunker.chunk(section_text)
    for chunk in result.chunks:
        print(chunk.label, chunk.start, chunk.end)
"""

import logging
from typing import Optional

from .models import Chunk, ChunkingConfig, ChunkingResult, ChunkingStats
from .token_counter import count_tokens_batch

logger = logging.getLogger(__name__)

PARAGRAPH_BREAK = "\n\n"
SENTENCE_BREAK = ". "


class DocumentChunker:
    """
    Splits section text into ordered, overlapping chunks that prefer
    paragraph and sentence boundaries.
    """

    def __init__(self, config: Optional[ChunkingConfig] = None, model: Optional[str] = None):
        self.config = config or ChunkingConfig()
        self.model = model

    def chunk(self, text: str) -> ChunkingResult:
        """
        Chunk a text and compute statistics.

        Token counts are a best-effort estimate: if the tokenizer cannot be
        loaded the chunks keep token_count=0 and a warning is logged.

        Args:
            text: Section text (may be empty).

        Returns:
            ChunkingResult with chunks in source order.
        """
        chunks = self.split(text)
        self._estimate_tokens(chunks)
        stats = self._compute_stats(chunks, text)
        logger.info(
            f"Split {stats.total_chars} chars into {stats.total_chunks} chunk(s) "
            f"(~{stats.total_tokens} tokens)"
        )
        return ChunkingResult(config=self.config, chunks=chunks, stats=stats)

    def split(self, text: str) -> list[Chunk]:
        """Return the chunks for a text without statistics or token counts."""
        spans = self._compute_spans(text)
        total = len(spans)
        return [
            Chunk(index=i, total=total, start=start, end=end, text=text[start:end])
            for i, (start, end) in enumerate(spans, start=1)
        ]

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _estimate_tokens(self, chunks: list[Chunk]) -> None:
        try:
            counts = count_tokens_batch([c.text for c in chunks], self.model)
        except Exception as e:
            # tiktoken fetches its BPE file on first use
            logger.warning(f"Token estimate unavailable: {e}")
            return
        for chunk, count in zip(chunks, counts):
            chunk.token_count = count

    def _compute_spans(self, text: str) -> list[tuple[int, int]]:
        max_chars = self.config.max_chunk_chars
        overlap = self.config.overlap_chars
        length = len(text)

        if length <= max_chars:
            return [(0, length)]

        spans: list[tuple[int, int]] = []
        start = 0
        while start < length:
            end = start + max_chars
            if end < length:
                end = self._snap_end(text, start, end)
            else:
                end = length

            spans.append((start, end))
            if end >= length:
                break

            # Overlap, but never stall on a chunk shorter than the overlap.
            start = max(end - overlap, start + 1, 0)

        return spans

    def _snap_end(self, text: str, start: int, end: int) -> int:
        """Move a hard cut back to the nearest paragraph or sentence break."""
        window_start = max(start, end - self.config.lookback_chars)

        for marker in (PARAGRAPH_BREAK, SENTENCE_BREAK):
            pos = text.rfind(marker, window_start, end)
            if pos != -1 and pos > start:
                return pos + len(marker)
        return end

    def _compute_stats(self, chunks: list[Chunk], text: str) -> ChunkingStats:
        if not chunks:
            return ChunkingStats()
        lengths = [c.length for c in chunks]
        return ChunkingStats(
            total_chunks=len(chunks),
            total_chars=len(text),
            total_tokens=sum(c.token_count for c in chunks),
            max_chunk_chars=max(lengths),
            min_chunk_chars=min(lengths),
        )


def split_text(text: str, config: Optional[ChunkingConfig] = None) -> list[Chunk]:
    """Split a text with the given (or default) configuration."""
    return DocumentChunker(config).split(text)
