"""
OpenAI API Client for materials summarization.

This module provides an async chat-completions client with:
- Retry logic with exponential backoff (per call, so only a failing chunk is retried)
- Token usage tracking
- Response validation (free text in, free text out)
- Error handling with custom exceptions

The SDK's own retries are disabled; the loop here decides what is retried.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

from openai import (
    AsyncOpenAI,
    APIError as OpenAIAPIError,
    APIConnectionError as OpenAIConnectionError,
    APITimeoutError as OpenAITimeoutError,
    RateLimitError,
)

from .exceptions import (
    APIError,
    APIConnectionError,
    APIRateLimitError,
    APIResponseError,
    APITimeoutError,
    is_retryable,
)


logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class APIResponse:
    """
    Parsed response from a chat-completions call.

    Attributes:
        content: Generated text ("" when the model returned no content)
        input_tokens: Input tokens used
        output_tokens: Output tokens used
        model: Model used for the request
        finish_reason: Why the model stopped (stop, length, etc.)
    """

    content: str
    input_tokens: int
    output_tokens: int
    model: str
    finish_reason: str

    @property
    def total_tokens(self) -> int:
        """Total tokens used."""
        return self.input_tokens + self.output_tokens


@dataclass
class TokenUsage:
    """
    Cumulative token usage tracker.

    Tracks total tokens used across multiple API calls.
    """

    input_tokens: int = 0
    output_tokens: int = 0
    request_count: int = 0

    def add(self, response: APIResponse) -> None:
        """Add tokens from a response."""
        self.input_tokens += response.input_tokens
        self.output_tokens += response.output_tokens
        self.request_count += 1

    @property
    def total_tokens(self) -> int:
        """Total tokens used."""
        return self.input_tokens + self.output_tokens

    def estimate_cost(self, model: str = "gpt-4o") -> float:
        """
        Estimate cost in USD based on token usage.

        Args:
            model: Model name for pricing

        Returns:
            Estimated cost in USD
        """
        pricing = {
            "gpt-4o": {"input": 2.50 / 1_000_000, "output": 10.00 / 1_000_000},
            "gpt-4o-mini": {"input": 0.15 / 1_000_000, "output": 0.60 / 1_000_000},
            "gpt-4": {"input": 30.00 / 1_000_000, "output": 60.00 / 1_000_000},
        }
        prices = pricing.get(model, pricing["gpt-4o"])
        return (self.input_tokens * prices["input"]) + (self.output_tokens * prices["output"])

    def to_dict(self, model: str = "gpt-4o") -> dict:
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "total_tokens": self.total_tokens,
            "request_count": self.request_count,
            "estimated_cost_usd": round(self.estimate_cost(model), 4),
        }


# =============================================================================
# API CLIENT
# =============================================================================


class SummaryAPIClient:
    """
    Async OpenAI chat client used for chunk extraction and merging.

    Usage:
        client = SummaryAPIClient()
        response = await client.complete(
            system_prompt="You are a construction materials analyst...",
            user_prompt="Extract the materials...",
        )
        print(response.content)

        print(f"Total tokens: {client.usage.total_tokens}")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o",
        max_tokens: int = 4096,
        temperature: float = 0.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 120.0,
    ):
        """
        Initialize the API client.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            model: Chat model to use
            max_tokens: Maximum response tokens
            temperature: Sampling temperature (0 = deterministic)
            max_retries: Maximum attempts per call
            retry_delay: Initial delay between retries (exponential backoff)
            timeout: Per-request timeout handed to the SDK (seconds)
        """
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self.api_key:
            raise ValueError("OpenAI API key required. Set OPENAI_API_KEY environment variable.")

        self.client = AsyncOpenAI(api_key=self.api_key, timeout=timeout, max_retries=0)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout

        self.usage = TokenUsage()

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: Optional[int] = None,
        usage: Optional[TokenUsage] = None,
    ) -> APIResponse:
        """
        Make a text-only chat-completions call.

        Args:
            system_prompt: System message content
            user_prompt: User message content
            max_tokens: Override for the response token limit
            usage: Optional extra tracker (e.g. per pipeline run)

        Returns:
            APIResponse with the generated text

        Raises:
            APIConnectionError: Cannot connect to API
            APITimeoutError: Request timed out on every attempt
            APIRateLimitError: Rate limit exceeded
            APIResponseError: Malformed or blocked response
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        response = await self._call_with_retry(messages, max_tokens or self.max_tokens)
        parsed = self._parse_response(response)
        if usage is not None:
            usage.add(parsed)
        return parsed

    async def _call_with_retry(
        self,
        messages: list[dict],
        max_tokens: int,
    ) -> Any:
        """
        Make API call with retry logic.

        Uses exponential backoff for retries. Only errors that `is_retryable`
        accepts are retried; the last one is raised once attempts run out.
        """
        last_error: Optional[APIError] = None
        delay = self.retry_delay

        for attempt in range(self.max_retries):
            try:
                logger.debug(f"API call attempt {attempt + 1}/{self.max_retries}")

                return await self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    max_tokens=max_tokens,
                    temperature=self.temperature,
                )

            except OpenAIAPIError as e:
                error = self._wrap_error(e)
                if not is_retryable(error):
                    raise error from e
                logger.warning(f"{error.message}, retrying in {delay}s...")
                last_error = error

            if attempt < self.max_retries - 1:
                await asyncio.sleep(delay)
                delay *= 2

        if last_error is None:
            raise APIError("Max retries exceeded")
        raise last_error

    def _wrap_error(self, error: OpenAIAPIError) -> APIError:
        """Map an SDK exception onto the summarization exception tree."""
        if isinstance(error, RateLimitError):
            return APIRateLimitError(original_error=error)
        if isinstance(error, OpenAITimeoutError):
            return APITimeoutError(self.timeout, original_error=error)
        if isinstance(error, OpenAIConnectionError):
            return APIConnectionError(original_error=error)
        status_code = getattr(error, "status_code", None)
        if status_code is not None and status_code >= 500:
            return APIError("Server error", error, status_code)
        return APIError(str(error), error, status_code)

    def _parse_response(self, response: Any) -> APIResponse:
        """
        Validate the completion and pull out its text.

        A message without content is valid and yields "". A completion
        without choices or message is malformed.
        """
        choices = getattr(response, "choices", None)
        if not choices:
            raise APIResponseError("No choices in API response")

        choice = choices[0]
        message = getattr(choice, "message", None)
        if message is None:
            raise APIResponseError("No message in API response")

        content = message.content or ""
        finish_reason = choice.finish_reason or ""

        if finish_reason == "content_filter":
            raise APIResponseError("Response blocked by content filter", content)
        if finish_reason == "length":
            logger.warning("Response truncated at max_tokens; summary may be incomplete")

        usage = getattr(response, "usage", None)
        api_response = APIResponse(
            content=content.strip(),
            input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage, "completion_tokens", 0) or 0,
            model=getattr(response, "model", None) or self.model,
            finish_reason=finish_reason,
        )

        self.usage.add(api_response)

        return api_response

    async def close(self) -> None:
        await self.client.close()
