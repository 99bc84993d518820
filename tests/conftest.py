"""Pytest configuration and fixtures for backend tests.

Provides translator settings, API Gateway events and a fake HTTP
response for exercising the translate handler without network access.
"""

from __future__ import annotations

import io
import json
import sys
import urllib.error
from pathlib import Path
from typing import Any
from typing import Optional
from uuid import uuid4

import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

TEST_API_KEY = 'test-api-key'
TEST_SERVICE_URL = 'https://api.us-south.language-translator.example.com/instances/abc'


class FakeHTTPResponse:
    """Minimal stand-in for the object returned by urllib.request.urlopen."""

    def __init__(self, payload: Any, status: int = 200) -> None:
        if isinstance(payload, (bytes, str)):
            raw = payload if isinstance(payload, bytes) else payload.encode('utf-8')
        else:
            raw = json.dumps(payload).encode('utf-8')
        self._raw = raw
        self.status = status

    def read(self) -> bytes:
        return self._raw

    def __enter__(self) -> 'FakeHTTPResponse':
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None


def make_http_error(code: int, body: Optional[dict] = None) -> urllib.error.HTTPError:
    """Build an HTTPError carrying a JSON error document."""
    raw = json.dumps(body).encode('utf-8') if body is not None else b''
    return urllib.error.HTTPError(
        TEST_SERVICE_URL, code, 'error', None, io.BytesIO(raw)  # type: ignore[arg-type]
    )


# --- Settings Fixtures ---


@pytest.fixture
def translator_settings():
    """Settings with fake credentials and the default strict error mode."""
    from translate_proxy.config import TranslatorSettings

    return TranslatorSettings(api_key=TEST_API_KEY, service_url=TEST_SERVICE_URL)


@pytest.fixture
def legacy_settings(translator_settings):
    """Settings reproducing the historical 200-on-failure behavior."""
    from dataclasses import replace

    from translate_proxy.config import ErrorMode

    return replace(translator_settings, error_mode=ErrorMode.LEGACY)


@pytest.fixture
def translator_env(monkeypatch) -> dict[str, str]:
    """Populate the translator environment variables."""
    env = {
        'LANGUAGE_TRANSLATOR_IAM_APIKEY': TEST_API_KEY,
        'LANGUAGE_TRANSLATOR_URL': TEST_SERVICE_URL,
    }
    for name in (
        'LANGUAGE_TRANSLATOR_SECRET_ARN',
        'LANGUAGE_TRANSLATOR_VERSION',
        'TRANSLATE_MODEL_ID',
        'TRANSLATE_TIMEOUT_SECONDS',
        'TRANSLATE_ERROR_MODE',
    ):
        monkeypatch.delenv(name, raising=False)
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    return env


# --- Cache Fixtures ---


@pytest.fixture(autouse=True)
def _reset_caches():
    """Clear module-level caches so tests stay independent."""
    from translate_proxy.api.translate import reset_handler
    from translate_proxy.services.aws_clients import clear_client_cache
    from translate_proxy.services.secrets import clear_secret_cache

    reset_handler()
    clear_client_cache()
    clear_secret_cache()
    yield
    reset_handler()
    clear_client_cache()
    clear_secret_cache()


# --- API Event Fixtures ---


def make_api_event(payload: Any = None, **overrides: Any) -> dict:
    """Create an API Gateway proxy event with a JSON body."""
    event = {
        'httpMethod': 'POST',
        'path': '/v1/translate',
        'queryStringParameters': None,
        'headers': {'Content-Type': 'application/json'},
        'requestContext': {'requestId': str(uuid4())},
        'body': json.dumps(payload) if payload is not None else None,
        'isBase64Encoded': False,
    }
    event.update(overrides)
    return event


@pytest.fixture
def translation_result() -> dict:
    """Sample Language Translator payload."""
    return {
        'translations': [{'translation': 'Buenos días'}],
        'word_count': 2,
        'character_count': 12,
    }
