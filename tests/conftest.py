"""Pytest configuration and fixtures."""

import asyncio
from datetime import timedelta
from unittest.mock import patch

from fastapi.testclient import TestClient
import pytest

from app.main import create_app
from app.models.subtitle import Subtitle
from app.services.subtitle_provider import ParsedData, ProviderResult, SubtitleProvider

# ============================================================================
# Helpers
# ============================================================================


def ms(value: int) -> timedelta:
    """Shorthand for a millisecond duration."""
    return timedelta(milliseconds=value)


def make_subtitle(start_ms: int, end_ms: int, text: str, index: int = 0) -> Subtitle:
    """Build a subtitle entry from millisecond bounds."""
    return Subtitle(index=index, start=ms(start_ms), end=ms(end_ms), text=text)


# ============================================================================
# Test Doubles for Providers
# ============================================================================


class FakeSubtitleProvider(SubtitleProvider):
    """Test double for a subtitle provider.

    Returns a fixed result, counts calls, and can be told to fail.
    """

    def __init__(self, result: ProviderResult | None = None, should_fail=False):
        self.result = result if result is not None else ParsedData(subtitles=[])
        self.should_fail = should_fail
        self.calls = 0

    async def get_subtitle(self) -> ProviderResult:
        self.calls += 1
        # Yield once so concurrent callers interleave like real I/O
        await asyncio.sleep(0)
        if self.should_fail:
            raise ConnectionError("Provider unavailable")
        return self.result


# ============================================================================
# Base Fixtures
# ============================================================================


@pytest.fixture
def client():
    """Create test client without authentication."""
    with patch("app.core.security.settings") as mock_settings:
        mock_settings.api_key = None
        app = create_app()
        yield TestClient(app)


@pytest.fixture
def client_with_auth():
    """Client with API key configured (no default headers)."""
    with patch("app.core.security.settings") as mock_settings:
        mock_settings.api_key = "test_secret_key_12345"
        app = create_app()
        yield TestClient(app)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_srt():
    """Sample SRT content for testing."""
    return """1
00:00:01,000 --> 00:00:04,000
Hello world

2
00:00:05,000 --> 00:00:08,000
How are you?"""


@pytest.fixture
def sample_srt_secondary():
    """Second track aligned with sample_srt."""
    return """1
00:00:01,000 --> 00:00:04,000
Hola mundo

2
00:00:05,000 --> 00:00:08,000
¿Cómo estás?"""


@pytest.fixture
def unsorted_srt():
    """SRT content whose entries are not in time order."""
    return """1
00:00:05,000 --> 00:00:06,000
Second

2
00:00:01,000 --> 00:00:02,000
First

3
00:00:09,000 --> 00:00:10,000
Third"""


@pytest.fixture
def track():
    """Sorted, non-overlapping entries."""
    return [
        make_subtitle(0, 1000, "one", 1),
        make_subtitle(2000, 3000, "two", 2),
        make_subtitle(3500, 4500, "three", 3),
        make_subtitle(6000, 7000, "four", 4),
        make_subtitle(8000, 9000, "five", 5),
    ]


@pytest.fixture
def fake_provider():
    """Fake provider returning an empty parsed result."""
    return FakeSubtitleProvider()


@pytest.fixture
def fake_provider_error():
    """Fake provider configured to fail."""
    return FakeSubtitleProvider(should_fail=True)


def get_mock_target(function_name, target_module):
    """Get the correct import path for mocking a function.

    Patch where a name is IMPORTED, not where it is DEFINED: the API module
    holds its own reference to ``SubtitleController``, so patching
    ``app.services.subtitle_controller`` would not affect it.

    Example:
        path = get_mock_target("compose_subtitles", "app.api.v1.subtitles")
        with patch(path):  # app.api.v1.subtitles.compose_subtitles
            ...
    """
    return f"{target_module}.{function_name}"
