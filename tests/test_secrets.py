"""Tests for Secrets Manager credential lookup."""

from __future__ import annotations

import base64
import json
import sys
from pathlib import Path

import pytest
from botocore.exceptions import ClientError
from botocore.exceptions import NoCredentialsError

sys.path.append(str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

from translate_proxy.exceptions import ConfigurationError  # noqa: E402
from translate_proxy.services.secrets import (  # noqa: E402
    get_secret_json,
    get_translator_api_key,
)

SECRET_ARN = 'arn:aws:secretsmanager:us-east-1:123456789012:secret:translator'


@pytest.fixture
def secretsmanager(mocker):
    """Mock boto3 Secrets Manager client."""
    client = mocker.MagicMock()
    mocker.patch('boto3.client', return_value=client)
    return client


def test_reads_secret_string(secretsmanager) -> None:
    secretsmanager.get_secret_value.return_value = {
        'SecretString': json.dumps({'apikey': 'from-secret'})
    }
    assert get_translator_api_key(SECRET_ARN) == 'from-secret'
    secretsmanager.get_secret_value.assert_called_once_with(SecretId=SECRET_ARN)


def test_reads_secret_binary(secretsmanager) -> None:
    raw = json.dumps({'api_key': 'binary-key'}).encode()
    secretsmanager.get_secret_value.return_value = {
        'SecretBinary': base64.b64encode(raw)
    }
    assert get_translator_api_key(SECRET_ARN) == 'binary-key'


def test_caches_secret(secretsmanager) -> None:
    secretsmanager.get_secret_value.return_value = {
        'SecretString': json.dumps({'apikey': 'cached'})
    }
    get_secret_json(SECRET_ARN)
    get_secret_json(SECRET_ARN)
    assert secretsmanager.get_secret_value.call_count == 1


def test_empty_secret_is_configuration_error(secretsmanager) -> None:
    secretsmanager.get_secret_value.return_value = {}
    with pytest.raises(ConfigurationError):
        get_secret_json(SECRET_ARN)


def test_invalid_json_secret(secretsmanager) -> None:
    secretsmanager.get_secret_value.return_value = {'SecretString': 'plain'}
    with pytest.raises(ConfigurationError):
        get_secret_json(SECRET_ARN)


def test_secret_without_apikey(secretsmanager) -> None:
    secretsmanager.get_secret_value.return_value = {
        'SecretString': json.dumps({'username': 'x'})
    }
    with pytest.raises(ConfigurationError) as exc_info:
        get_translator_api_key(SECRET_ARN)
    assert 'apikey' in exc_info.value.detail


def test_access_denied_is_configuration_error(secretsmanager) -> None:
    secretsmanager.get_secret_value.side_effect = ClientError(
        {'Error': {'Code': 'AccessDeniedException', 'Message': 'denied'}},
        'GetSecretValue',
    )
    with pytest.raises(ConfigurationError) as exc_info:
        get_secret_json(SECRET_ARN)
    assert exc_info.value.config_name == 'LANGUAGE_TRANSLATOR_SECRET_ARN'
    assert 'AccessDeniedException' in exc_info.value.detail


def test_missing_aws_credentials_is_configuration_error(secretsmanager) -> None:
    secretsmanager.get_secret_value.side_effect = NoCredentialsError()
    with pytest.raises(ConfigurationError) as exc_info:
        get_secret_json(SECRET_ARN)
    assert 'NoCredentialsError' in exc_info.value.detail
