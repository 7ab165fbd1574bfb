"""
Chunking Module - Boundary-aware character chunking for LLM summarization

Splits the text of a specification section into overlapping chunks that fit
the summarization model's input budget. Cuts prefer paragraph breaks, then
sentence ends, then an exact length cut.

Quick Start:
    from chunking import DocumentChunker, ChunkingConfig

    chunker = DocumentChunker(ChunkingConfig(max_chunk_chars=24_000, overlap_chars=2_000))
    result = chunker.chunk(section_text)
    print(result.total_chunks)
"""

__version__ = "1.0.0"

from .chunker import DocumentChunker, split_text
from .models import (
    Chunk,
    ChunkingConfig,
    ChunkingResult,
    ChunkingStats,
)
from .token_counter import count_tokens

__all__ = [
    "__version__",
    "DocumentChunker",
    "split_text",
    "Chunk",
    "ChunkingConfig",
    "ChunkingResult",
    "ChunkingStats",
    "count_tokens",
]
