"""Language Translator client.

Issues a single ``POST /v3/translate`` call per query against the
configured Language Translator instance and returns the service's JSON
payload untouched. The API key is sent as the ``apikey`` basic
credential, which the service accepts in place of an IAM bearer token.

No retries and no caching: a failed call is reported once to the caller,
either raised (``translate``) or wrapped (``translate_outcome``).
"""

from __future__ import annotations

import base64
import json
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any
from typing import Optional
from typing import Union

from translate_proxy.config import TranslatorSettings
from translate_proxy.exceptions import AppError
from translate_proxy.exceptions import ConfigurationError
from translate_proxy.exceptions import TranslationServiceError
from translate_proxy.utils.logging import get_logger

logger = get_logger(__name__)

TRANSLATE_PATH = "/v3/translate"


@dataclass(frozen=True)
class TranslationQuery:
    """Text plus the language pair requested from the service."""

    text: str
    model_id: str

    def to_payload(self) -> dict[str, Any]:
        return {"text": [self.text], "model_id": self.model_id}


@dataclass(frozen=True)
class TranslationSuccess:
    result: dict[str, Any]


@dataclass(frozen=True)
class TranslationFailure:
    error: AppError


TranslationOutcome = Union[TranslationSuccess, TranslationFailure]


class LanguageTranslatorClient:
    """Thin HTTP client for the translate operation."""

    def __init__(self, settings: TranslatorSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> TranslatorSettings:
        return self._settings

    def build_url(self) -> str:
        """Return the translate endpoint URL including the version query."""
        base = self._settings.require_service_url()
        query = urllib.parse.urlencode({"version": self._settings.api_version})
        return f"{base}{TRANSLATE_PATH}?{query}"

    def translate(self, query: TranslationQuery) -> dict[str, Any]:
        """Translate ``query`` and return the raw service payload.

        Raises:
            ConfigurationError: If the URL or API key is not configured.
            TranslationServiceError: If the call fails or the response is
                not a JSON object.
        """
        url = self.build_url()
        api_key = self._settings.resolve_api_key()

        credentials = base64.b64encode(f"apikey:{api_key}".encode("utf-8"))
        try:
            req = urllib.request.Request(
                url,
                data=json.dumps(query.to_payload()).encode("utf-8"),
                headers={
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "Authorization": f"Basic {credentials.decode('ascii')}",
                },
                method="POST",
            )
        except ValueError as exc:
            raise ConfigurationError(
                "LANGUAGE_TRANSLATOR_URL", "must be an http(s) URL"
            ) from exc

        logger.info(
            f"Calling translator model {query.model_id}",
            extra={"model_id": query.model_id, "text_length": len(query.text)},
        )

        try:
            with urllib.request.urlopen(
                req, timeout=self._settings.timeout_seconds
            ) as resp:
                raw = resp.read().decode("utf-8", errors="replace")
        except urllib.error.HTTPError as exc:
            raise _service_error_from_http(exc) from exc
        except (urllib.error.URLError, OSError) as exc:
            raise TranslationServiceError(
                "Translation service unreachable",
                detail=f"{type(exc).__name__}: {exc}",
            ) from exc

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise TranslationServiceError(
                "Translation service returned invalid JSON"
            ) from exc
        if not isinstance(payload, dict):
            raise TranslationServiceError(
                "Translation service returned an unexpected payload"
            )
        return payload

    def translate_outcome(self, query: TranslationQuery) -> TranslationOutcome:
        """Translate ``query`` and wrap application errors as a failure."""
        try:
            return TranslationSuccess(self.translate(query))
        except AppError as exc:
            return TranslationFailure(exc)


def _service_error_from_http(exc: urllib.error.HTTPError) -> TranslationServiceError:
    body = ""
    try:
        body = exc.read().decode("utf-8", errors="replace")
    except Exception:  # nosec B110 - best-effort body read; empty string is fine
        body = ""
    return TranslationServiceError(
        f"Translation service returned HTTP {exc.code}",
        upstream_status=exc.code,
        detail=_extract_error_message(body),
    )


def _extract_error_message(body: str) -> Optional[str]:
    """Pull the ``error`` field out of a service error document."""
    if not body:
        return None
    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        return body[:200]
    if isinstance(payload, dict):
        message = payload.get("error") or payload.get("errorMessage")
        if message:
            return str(message)
    return None
