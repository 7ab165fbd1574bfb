"""Tests for chunking.models."""

import pytest

from chunking.models import (
    Chunk,
    ChunkingConfig,
    ChunkingResult,
    ChunkingStats,
)


class TestChunkingConfig:
    def test_defaults(self):
        config = ChunkingConfig()
        assert config.max_chunk_chars == 24_000
        assert config.overlap_chars == 2_000
        assert config.lookback_chars == 1_000

    def test_custom_values(self):
        config = ChunkingConfig(max_chunk_chars=8_000, overlap_chars=500, lookback_chars=200)
        assert config.max_chunk_chars == 8_000
        assert config.overlap_chars == 500
        assert config.lookback_chars == 200

    def test_overlap_must_be_smaller_than_max(self):
        with pytest.raises(ValueError):
            ChunkingConfig(max_chunk_chars=1_000, overlap_chars=1_000)

    def test_rejects_non_positive_max(self):
        with pytest.raises(ValueError):
            ChunkingConfig(max_chunk_chars=0, overlap_chars=0)

    def test_rejects_negative_overlap(self):
        with pytest.raises(ValueError):
            ChunkingConfig(overlap_chars=-1)


class TestChunk:
    def test_length_and_label(self):
        chunk = Chunk(index=2, total=3, start=100, end=250, text="x" * 150)
        assert chunk.length == 150
        assert chunk.label == "part 2 of 3"

    def test_index_is_one_based(self):
        with pytest.raises(ValueError):
            Chunk(index=0, total=1, start=0, end=0, text="")

    def test_to_dict(self):
        chunk = Chunk(index=1, total=1, start=0, end=5, text="Brick", token_count=1)
        data = chunk.to_dict()
        assert data == {
            "index": 1,
            "total": 1,
            "start": 0,
            "end": 5,
            "text": "Brick",
            "token_count": 1,
        }


class TestChunkingResult:
    def test_total_and_single(self):
        chunk = Chunk(index=1, total=1, start=0, end=4, text="Tile")
        result = ChunkingResult(config=ChunkingConfig(), chunks=[chunk])
        assert result.total_chunks == 1
        assert result.is_single

    def test_default_stats(self):
        result = ChunkingResult(config=ChunkingConfig())
        assert result.stats == ChunkingStats()
        assert result.total_chunks == 0
        assert not result.is_single

    def test_to_dict_includes_config(self):
        result = ChunkingResult(config=ChunkingConfig(max_chunk_chars=500, overlap_chars=50))
        data = result.to_dict()
        assert data["config"]["max_chunk_chars"] == 500
        assert data["chunks"] == []
