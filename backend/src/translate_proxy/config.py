"""Process-wide translator settings loaded from the environment."""

from __future__ import annotations

import enum
import os
import urllib.parse
from dataclasses import dataclass
from typing import Mapping
from typing import Optional

from translate_proxy.exceptions import ConfigurationError

DEFAULT_MODEL_ID = "en-es"
DEFAULT_API_VERSION = "2018-05-01"
DEFAULT_TIMEOUT_SECONDS = 10
MAX_TIMEOUT_SECONDS = 30


class ErrorMode(str, enum.Enum):
    """How outbound translation failures are reported to the caller."""

    # Map failures to the error's status code with an error body.
    STRICT = "strict"
    # Reproduce the historical behavior: 200 with an empty body.
    LEGACY = "legacy"


@dataclass(frozen=True)
class TranslatorSettings:
    """Immutable translator configuration.

    Missing credentials are not rejected here; they surface as a
    ConfigurationError from the first outbound call.
    """

    api_key: Optional[str] = None
    service_url: Optional[str] = None
    secret_arn: Optional[str] = None
    api_version: str = DEFAULT_API_VERSION
    model_id: str = DEFAULT_MODEL_ID
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    error_mode: ErrorMode = ErrorMode.STRICT

    def resolve_api_key(self) -> str:
        """Return the API key, reading it from Secrets Manager if needed.

        Raises:
            ConfigurationError: If neither a key nor a secret is configured.
        """
        if self.api_key:
            return self.api_key
        if self.secret_arn:
            from translate_proxy.services.secrets import get_translator_api_key

            return get_translator_api_key(self.secret_arn)
        raise ConfigurationError("LANGUAGE_TRANSLATOR_IAM_APIKEY")

    def require_service_url(self) -> str:
        """Return the service URL without a trailing slash.

        Raises:
            ConfigurationError: If the URL is unset or not an http(s) URL.
        """
        if not self.service_url:
            raise ConfigurationError("LANGUAGE_TRANSLATOR_URL")
        parsed = urllib.parse.urlparse(self.service_url)
        if parsed.scheme not in ("https", "http") or not parsed.netloc:
            raise ConfigurationError(
                "LANGUAGE_TRANSLATOR_URL", "must be an http(s) URL"
            )
        return self.service_url.rstrip("/")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> TranslatorSettings:
    """Build settings from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Raises:
        ConfigurationError: If an optional setting has an invalid value.
    """
    env = os.environ if environ is None else environ

    return TranslatorSettings(
        api_key=_optional(env, "LANGUAGE_TRANSLATOR_IAM_APIKEY"),
        service_url=_optional(env, "LANGUAGE_TRANSLATOR_URL"),
        secret_arn=_optional(env, "LANGUAGE_TRANSLATOR_SECRET_ARN"),
        api_version=_optional(env, "LANGUAGE_TRANSLATOR_VERSION")
        or DEFAULT_API_VERSION,
        model_id=_optional(env, "TRANSLATE_MODEL_ID") or DEFAULT_MODEL_ID,
        timeout_seconds=_parse_timeout(_optional(env, "TRANSLATE_TIMEOUT_SECONDS")),
        error_mode=_parse_error_mode(_optional(env, "TRANSLATE_ERROR_MODE")),
    )


def _optional(env: Mapping[str, str], name: str) -> Optional[str]:
    value = (env.get(name) or "").strip()
    return value or None


def _parse_timeout(value: Optional[str]) -> int:
    if value is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = int(value)
    except ValueError as exc:
        raise ConfigurationError(
            "TRANSLATE_TIMEOUT_SECONDS", "must be an integer"
        ) from exc
    if timeout <= 0:
        raise ConfigurationError("TRANSLATE_TIMEOUT_SECONDS", "must be positive")
    if timeout > MAX_TIMEOUT_SECONDS:
        raise ConfigurationError(
            "TRANSLATE_TIMEOUT_SECONDS", f"must not exceed {MAX_TIMEOUT_SECONDS}"
        )
    return timeout


def _parse_error_mode(value: Optional[str]) -> ErrorMode:
    if value is None:
        return ErrorMode.STRICT
    try:
        return ErrorMode(value.lower())
    except ValueError as exc:
        allowed = ", ".join(mode.value for mode in ErrorMode)
        raise ConfigurationError(
            "TRANSLATE_ERROR_MODE", f"must be one of: {allowed}"
        ) from exc
