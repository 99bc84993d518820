"""Shared response utilities for Lambda handlers."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any
from typing import Optional

from pydantic import BaseModel

JSON_CONTENT_TYPE = "application/json"


def json_response(
    status_code: int,
    body: Any,
    headers: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    """Create a JSON API Gateway response.

    Args:
        status_code: HTTP status code.
        body: Response body (dict, Pydantic model, or dataclass). ``None``
            produces an empty body rather than the JSON literal ``null``.
        headers: Optional additional headers to include.

    Returns:
        API Gateway response dictionary.
    """
    response_headers = {"Content-Type": JSON_CONTENT_TYPE}
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": "" if body is None else json.dumps(_serialize_body(body), default=str),
    }


def _serialize_body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump()

    if hasattr(body, "__dataclass_fields__"):
        return asdict(body)

    return body


def error_response(
    status_code: int,
    message: str,
    detail: Optional[str] = None,
) -> dict[str, Any]:
    """Create an error response with an ``{"error", "detail"}`` body."""
    body: dict[str, Any] = {"error": message}
    if detail:
        body["detail"] = detail

    return json_response(status_code, body)
