"""
Token Counter for the Chunking Pipeline

Chunk budgets are expressed in characters, but the model's limit is in
tokens. DocumentChunker.chunk attaches the estimate to every chunk and logs it so an
oversized configuration shows up before the API rejects a request.

Uses tiktoken with the encoding of the configured OpenAI model when tiktoken
knows it, else cl100k_base.

Usage:
    from chunking.token_counter import count_tokens, count_tokens_batch

    n = count_tokens("Concrete masonry units: ASTM C90.")
    counts = count_tokens_batch(["Mortar: ASTM C270.", "Grout: ASTM C476."], model="gpt-4o")
"""

from typing import Optional

import tiktoken

DEFAULT_ENCODING = "cl100k_base"

# Encoders are cached per model name; tiktoken loads BPE files on first use.
_encoders: dict[str, tiktoken.Encoding] = {}


def _get_encoder(model: Optional[str] = None) -> tiktoken.Encoding:
    """Get or initialize the encoder for a model (cached)."""
    key = model or DEFAULT_ENCODING
    encoder = _encoders.get(key)
    if encoder is None:
        if model:
            try:
                encoder = tiktoken.encoding_for_model(model)
            except KeyError:
                encoder = tiktoken.get_encoding(DEFAULT_ENCODING)
        else:
            encoder = tiktoken.get_encoding(DEFAULT_ENCODING)
        _encoders[key] = encoder
    return encoder


def count_tokens(text: str, model: Optional[str] = None) -> int:
    """
    Count the number of tokens in a text string.

    Args:
        text: The text to tokenize.
        model: Optional OpenAI model name to pick the matching encoding.

    Returns:
        Number of tokens.
    """
    if not text:
        return 0
    return len(_get_encoder(model).encode(text))


def count_tokens_batch(texts: list[str], model: Optional[str] = None) -> list[int]:
    """
    Count tokens for a list of texts.

    Args:
        texts: List of text strings.
        model: Optional OpenAI model name.

    Returns:
        List of token counts, one per input text.
    """
    encoder = _get_encoder(model)
    return [len(encoder.encode(t)) if t else 0 for t in texts]
