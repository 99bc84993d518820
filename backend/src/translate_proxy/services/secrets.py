"""Secrets Manager helpers for translator credentials."""

from __future__ import annotations

import base64
import json
from typing import Any

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError

from translate_proxy.exceptions import ConfigurationError
from translate_proxy.services.aws_clients import get_secretsmanager_client

_SECRET_CACHE: dict[str, dict[str, Any]] = {}

# Keys checked, in order, for the translator API key inside the secret.
API_KEY_FIELDS = ("apikey", "api_key", "LANGUAGE_TRANSLATOR_IAM_APIKEY")


def get_secret_json(secret_arn: str) -> dict[str, Any]:
    """Fetch a secret from AWS Secrets Manager and parse JSON."""
    if secret_arn in _SECRET_CACHE:
        return _SECRET_CACHE[secret_arn]

    try:
        client = get_secretsmanager_client()
        response = client.get_secret_value(SecretId=secret_arn)
    except ClientError as exc:
        code = exc.response.get("Error", {}).get("Code", type(exc).__name__)
        raise ConfigurationError(
            "LANGUAGE_TRANSLATOR_SECRET_ARN", f"secret lookup failed: {code}"
        ) from exc
    except BotoCoreError as exc:
        raise ConfigurationError(
            "LANGUAGE_TRANSLATOR_SECRET_ARN",
            f"secret lookup failed: {type(exc).__name__}",
        ) from exc
    secret_str = response.get("SecretString")
    if not secret_str and response.get("SecretBinary"):
        secret_str = base64.b64decode(response["SecretBinary"]).decode("utf-8")
    if not secret_str:
        raise ConfigurationError("LANGUAGE_TRANSLATOR_SECRET_ARN", "secret is empty")

    try:
        secret_payload = json.loads(secret_str)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            "LANGUAGE_TRANSLATOR_SECRET_ARN", "secret is not valid JSON"
        ) from exc
    if not isinstance(secret_payload, dict):
        raise ConfigurationError(
            "LANGUAGE_TRANSLATOR_SECRET_ARN", "secret must be a JSON object"
        )

    _SECRET_CACHE[secret_arn] = secret_payload
    return secret_payload


def get_translator_api_key(secret_arn: str) -> str:
    """Return the translator API key stored in the given secret."""
    payload = get_secret_json(secret_arn)
    for field in API_KEY_FIELDS:
        value = payload.get(field)
        if value:
            return str(value)
    raise ConfigurationError(
        "LANGUAGE_TRANSLATOR_SECRET_ARN", "secret has no apikey field"
    )


def clear_secret_cache() -> None:
    """Clear cached secrets (useful in tests)."""
    _SECRET_CACHE.clear()
