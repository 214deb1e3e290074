"""
Pytest configuration and shared fixtures for Translation Hub tests.
"""
import os
import sys
import json
import pytest
from pathlib import Path
from typing import Callable, List

import httpx

# Keep test runs from writing log files
os.environ.setdefault("TRANSLATION_HUB_LOG_FILE", "")

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import Settings


VALID_KEY = "sk-test-" + "x" * 32


# ============================================================================
# Fixtures: Configuration & Settings
# ============================================================================

def make_settings(**overrides) -> Settings:
    """Settings isolated from the developer's .env"""
    values = dict(
        openrouter_api_key=VALID_KEY,
        deepl_api_key=VALID_KEY,
        gemini_api_key=VALID_KEY,
        poll_interval=0,
        document_timeout=5,
        debounce_seconds=0.05,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with mock API keys."""
    return make_settings()


# ============================================================================
# Fixtures: HTTP mocking
# ============================================================================

class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)


@pytest.fixture
def mock_http():
    """
    Build an httpx.AsyncClient served by a handler function.

    Usage:
        client, transport = mock_http(lambda request: httpx.Response(200, json={}))
    """
    def factory(handler):
        transport = RecordingTransport(handler)
        return httpx.AsyncClient(transport=transport), transport
    return factory


def chat_response(content: str) -> httpx.Response:
    """OpenRouter chat completion body"""
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})


def gemini_response(text: str) -> httpx.Response:
    """Gemini generateContent body"""
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content.decode("utf-8"))
