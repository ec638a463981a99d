"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import httpx
import pytest

from zen_quotes.config import ApiConfig, RetryConfig
from zen_quotes.quotes import QuoteClient, QuoteFetcher


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays responses."""

    def __init__(self, responses: list[httpx.Response | Exception] | None = None):
        self.responses = list(responses or [])
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # Keep replaying the last response once the list runs out
        outcome = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def ok(content: str = "Stay hungry, stay foolish.", author: str = "Stewart Brand") -> httpx.Response:
    return httpx.Response(
        200,
        json={"_id": "abc", "content": content, "author": author, "tags": ["life"]},
    )


def failing() -> httpx.Response:
    return httpx.Response(503, text="Service Unavailable")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config(temp_dir):
    """Create a sample config file."""
    config_path = temp_dir / "config.yaml"
    config_path.write_text("""
api:
  base_url: "https://quotes.example.com"
  timeout_seconds: 5

retry:
  max_retries: 4
  delay_seconds: 0.5

session:
  default_category: "life"
  discard_stale_results: false
""")
    return config_path


@pytest.fixture
def fast_retry():
    """Retry config with the standard budget and a near-zero delay."""
    return RetryConfig(max_retries=2, delay_seconds=0.01)


@pytest.fixture
def make_fetcher(fast_retry):
    """Build a fetcher whose client talks to a RecordingHandler."""

    def _make(handler: RecordingHandler) -> QuoteFetcher:
        client = QuoteClient(ApiConfig(), transport=httpx.MockTransport(handler))
        return QuoteFetcher(client, retry=fast_retry)

    return _make


@pytest.fixture
def make_handler():
    """Factory for RecordingHandler instances."""
    return RecordingHandler


@pytest.fixture
def quote_response():
    """Factory for successful API responses."""
    return ok


@pytest.fixture
def error_response():
    """Factory for 503 API responses."""
    return failing
