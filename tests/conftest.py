"""
Pytest fixtures for the materials extractor tests.
"""

import asyncio
import re
from typing import Optional

import fitz  # PyMuPDF
import pytest
import tiktoken

from chunking import token_counter
from summarization.api_client import APIResponse
from summarization.exceptions import APIConnectionError


class FakeEncoding:
    """Word-and-punctuation tokenizer standing in for a tiktoken Encoding."""

    def __init__(self, name: str = "cl100k_base"):
        self.name = name

    def encode(self, text: str) -> list[int]:
        return [len(token) for token in re.findall(r"\w+|[^\w\s]", text)]


def _encoding_for_model(model: str) -> FakeEncoding:
    if not model.startswith("gpt-"):
        raise KeyError(model)
    return FakeEncoding("o200k_base")


@pytest.fixture(autouse=True)
def offline_tokenizer(monkeypatch):
    """Keep tiktoken from downloading BPE files; the encoder cache starts empty."""
    monkeypatch.setattr(tiktoken, "get_encoding", FakeEncoding)
    monkeypatch.setattr(tiktoken, "encoding_for_model", _encoding_for_model)
    monkeypatch.setattr(token_counter, "_encoders", {})


def build_pdf(pages: list[tuple[str, Optional[str]]]) -> bytes:
    """
    Build an in-memory PDF.

    Each entry is (body_text, footer_text); footer text is printed near the
    bottom edge of an A4 page, body text near the top.
    """
    doc = fitz.open()
    for body, footer in pages:
        page = doc.new_page()
        if body:
            page.insert_text((72, 100), body, fontsize=11)
        if footer:
            page.insert_text((72, 815), footer, fontsize=9)
    data = doc.tobytes()
    doc.close()
    return data


class FakeCompletionClient:
    """
    Stand-in for SummaryAPIClient.

    Responds with "materials[<user prompt head>]" unless a rule matches.
    `fail_on` maps a substring of the user prompt to an exception to raise;
    `delays` maps a substring to seconds to sleep before answering.
    """

    def __init__(self, responder=None, fail_on=None, delays=None):
        self.responder = responder
        self.fail_on = fail_on or {}
        self.delays = delays or {}
        self.calls: list[tuple[str, str]] = []
        self.completed: list[str] = []
        self.cancelled: list[str] = []

    async def complete(self, system_prompt, user_prompt, max_tokens=None, usage=None):
        self.calls.append((system_prompt, user_prompt))
        try:
            for marker, seconds in self.delays.items():
                if marker in user_prompt:
                    await asyncio.sleep(seconds)
        except asyncio.CancelledError:
            self.cancelled.append(user_prompt)
            raise

        for marker, error in self.fail_on.items():
            if marker in user_prompt:
                raise error

        if self.responder is not None:
            content = self.responder(system_prompt, user_prompt)
        else:
            content = f"materials[{user_prompt[:40]}]"
        self.completed.append(user_prompt)
        response = APIResponse(
            content=content, input_tokens=10, output_tokens=5, model="fake", finish_reason="stop"
        )
        if usage is not None:
            usage.add(response)
        return response


@pytest.fixture
def masonry_pdf() -> bytes:
    """Six pages; pages 3-5 carry the keyword in the footer."""
    return build_pdf([
        ("Cover page", "PROJECT MANUAL"),
        ("Table of contents", "GENERAL REQUIREMENTS 01 00 00 - 1"),
        ("Concrete masonry units: ASTM C90.", "UNIT MASONRY 04 20 00 - 1"),
        ("Mortar: ASTM C270, Type S.", "UNIT MASONRY 04 20 00 - 2"),
        ("Grout: ASTM C476.", "UNIT MASONRY 04 20 00 - 3"),
        ("Structural steel", "STRUCTURAL STEEL 05 12 00 - 1"),
    ])


@pytest.fixture
def split_sections_pdf() -> bytes:
    """Two disjoint keyword runs: pages 2-3 and page 5."""
    return build_pdf([
        ("Intro", "GENERAL 01 00 00"),
        ("Brick veneer", "UNIT MASONRY 04 20 00 - 1"),
        ("Ties and anchors", "UNIT MASONRY 04 20 00 - 2"),
        ("Metals", "METAL FABRICATIONS 05 50 00"),
        ("Glass unit masonry", "UNIT MASONRY 04 23 00 - 1"),
    ])


@pytest.fixture
def no_keyword_pdf() -> bytes:
    return build_pdf([
        ("Only steel here", "STRUCTURAL STEEL 05 12 00"),
        ("UNIT MASONRY appears in the body only", None),
    ])


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def transport_error():
    return APIConnectionError("Connection reset by peer")
