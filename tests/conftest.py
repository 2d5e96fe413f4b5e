# ABOUTME: Shared fixtures for the crawler tests
# ABOUTME: Config pointing at a temp output dir and fake Gemini responses built from SimpleNamespace

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from municipality_crawler.config import Config

WIKI = "https://de.wikipedia.org"


def text_response(text: str | None) -> SimpleNamespace:
    """A generate_content response whose single part carries ``text``."""
    part = SimpleNamespace(text=text, inline_data=None)
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


def image_response(data: bytes, mime_type: str = "image/png") -> SimpleNamespace:
    """A generate_content response with a text part followed by an inline image part."""
    parts = [
        SimpleNamespace(text="Here is your diorama", inline_data=None),
        SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type)),
    ]
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


def make_genai_client(*responses) -> MagicMock:
    """Mock genai.Client whose aio.models.generate_content returns/raises ``responses`` in order."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(side_effect=list(responses))
    return client


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        _env_file=None,
        output_dir=tmp_path / "output",
        google_cloud_project="test-project",
        google_cloud_location="global",
        batch_delay_seconds=1.0,
    )
