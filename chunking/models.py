"""
Data Models for the Chunking Pipeline

Defines:
1. ChunkingConfig - Character budget, overlap and boundary lookback
2. Chunk - A contiguous slice of the section text with its position
3. ChunkingStats / ChunkingResult - Chunk plan with statistics

Design Principles:
- Pydantic v2 for validation and serialization (consistent with spec_reader)
- Offsets are kept on every chunk so coverage and overlap can be checked
- Positions are 1-based ("part 1 of 3") because they are shown to the model

Usage:
    config = ChunkingConfig(max_chunk_chars=24_000, overlap_chars=2_000)
    result = DocumentChunker(config).chunk(section_text)
"""

from typing import Any

from pydantic import BaseModel, Field


class ChunkingConfig(BaseModel):
    """
    Configuration for the character-based splitter.

    Defaults keep one chunk comfortably inside a GPT-4 class context window
    together with the extraction instructions.
    """
    max_chunk_chars: int = Field(
        24_000,
        description="Maximum characters per chunk",
        ge=1,
    )
    overlap_chars: int = Field(
        2_000,
        description="Characters shared by consecutive chunks",
        ge=0,
    )
    lookback_chars: int = Field(
        1_000,
        description="How far back from a hard cut to look for a paragraph or sentence break",
        ge=0,
    )

    def model_post_init(self, __context: Any) -> None:
        if self.overlap_chars >= self.max_chunk_chars:
            raise ValueError(
                f"overlap_chars ({self.overlap_chars}) must be less than "
                f"max_chunk_chars ({self.max_chunk_chars})"
            )


class Chunk(BaseModel):
    """
    A contiguous substring of the section text.

    `start`/`end` are character offsets into the original text
    (`text == source[start:end]`).
    """
    index: int = Field(
        ...,
        description="Position of this chunk (1-based)",
        ge=1,
    )
    total: int = Field(
        ...,
        description="Total number of chunks for the text",
        ge=1,
    )
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)
    text: str = Field(
        ...,
        description="The chunk text (may be empty for empty input)",
    )
    token_count: int = Field(
        0,
        description="Estimated tokens in this chunk",
        ge=0,
    )

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def label(self) -> str:
        return f"part {self.index} of {self.total}"

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class ChunkingStats(BaseModel):
    """Statistics about one split."""
    total_chunks: int = 0
    total_chars: int = 0
    total_tokens: int = 0
    max_chunk_chars: int = 0
    min_chunk_chars: int = 0


class ChunkingResult(BaseModel):
    """
    Ordered chunks for one section text plus statistics.
    """
    config: ChunkingConfig = Field(
        ...,
        description="Configuration used for chunking",
    )
    chunks: list[Chunk] = Field(
        default_factory=list,
        description="Chunks in source order",
    )
    stats: ChunkingStats = Field(
        default_factory=ChunkingStats,
        description="Chunking statistics",
    )

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    @property
    def is_single(self) -> bool:
        return len(self.chunks) == 1

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
