from dataclasses import dataclass
import os
from typing import Optional

from chunking import ChunkingConfig


@dataclass
class SummarizationConfig:
    api_key: Optional[str] = None
    model: str = "gpt-4o"
    temperature: float = 0.0
    max_output_tokens: int = 4096
    max_retries: int = 3
    retry_delay: float = 1.0
    call_timeout: float = 120.0
    chunk_budget: float = 360.0
    max_chunk_chars: int = 24_000
    overlap_chars: int = 2_000
    lookback_chars: int = 1_000

    def chunking_config(self) -> ChunkingConfig:
        return ChunkingConfig(
            max_chunk_chars=self.max_chunk_chars,
            overlap_chars=self.overlap_chars,
            lookback_chars=self.lookback_chars,
        )

    @classmethod
    def from_env(cls) -> "SummarizationConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        def _float(name: str, default: float) -> float:
            value = os.environ.get(name)
            return float(value) if value else default

        return cls(
            api_key=os.environ.get("OPENAI_API_KEY"),
            model=os.environ.get("OPENAI_MODEL", cls.model),
            temperature=_float("SUMMARY_TEMPERATURE", cls.temperature),
            max_output_tokens=_int("SUMMARY_MAX_OUTPUT_TOKENS", cls.max_output_tokens),
            max_retries=_int("SUMMARY_MAX_RETRIES", cls.max_retries),
            retry_delay=_float("SUMMARY_RETRY_DELAY", cls.retry_delay),
            call_timeout=_float("SUMMARY_CALL_TIMEOUT", cls.call_timeout),
            chunk_budget=_float("SUMMARY_CHUNK_BUDGET", cls.chunk_budget),
            max_chunk_chars=_int("MAX_CHUNK_CHARS", cls.max_chunk_chars),
            overlap_chars=_int("OVERLAP_CHARS", cls.overlap_chars),
            lookback_chars=_int("CHUNK_LOOKBACK_CHARS", cls.lookback_chars),
        )
