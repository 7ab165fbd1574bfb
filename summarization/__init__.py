"""
Materials summarization for construction specification sections.

Splits section text into overlapping chunks, extracts materials and standards
from every chunk concurrently through the OpenAI chat API, and merges the
partial results into one report (Project Header, Quick Summary, Full
Detailed Breakdown).

Quick Start:
    import asyncio
    from summarization import MaterialsService

    service = MaterialsService()
    result = asyncio.run(service.extract_materials(section_text))
    print(result.summary)

Environment:
    OPENAI_API_KEY: Your OpenAI API key (required)
"""

__version__ = "1.0.0"

from .api_client import APIResponse, SummaryAPIClient, TokenUsage
from .config import SummarizationConfig
from .exceptions import (
    SummarizationError,
    InputValidationError,
    APIError,
    APIConnectionError,
    APITimeoutError,
    APIRateLimitError,
    APIResponseError,
    ChunkExtractionError,
    MergeError,
    is_retryable,
    format_error_chain,
)
from .merger import build_merge_prompt, merge_results
from .models import (
    ErrorResponse,
    ExtractMaterialsRequest,
    ExtractMaterialsResponse,
    SectionExtractRequest,
    SectionExtractResponse,
    SectionMaterials,
    SummaryResult,
)
from .orchestrator import extract_chunks
from .service import MaterialsService, SummaryPipeline

__all__ = [
    "__version__",
    "APIResponse",
    "SummaryAPIClient",
    "TokenUsage",
    "SummarizationConfig",
    "SummarizationError",
    "InputValidationError",
    "APIError",
    "APIConnectionError",
    "APITimeoutError",
    "APIRateLimitError",
    "APIResponseError",
    "ChunkExtractionError",
    "MergeError",
    "is_retryable",
    "format_error_chain",
    "build_merge_prompt",
    "merge_results",
    "ErrorResponse",
    "ExtractMaterialsRequest",
    "ExtractMaterialsResponse",
    "SectionExtractRequest",
    "SectionExtractResponse",
    "SectionMaterials",
    "SummaryResult",
    "extract_chunks",
    "MaterialsService",
    "SummaryPipeline",
]
