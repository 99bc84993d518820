"""Parsing helpers for Lambda invocation events."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any
from typing import Mapping
from typing import Optional


def parse_json_body(event: Mapping[str, Any]) -> dict[str, Any]:
    """Return the request payload carried by an invocation event.

    API Gateway proxy events carry the payload as a JSON string in
    ``body`` (optionally base64-encoded); direct invocations carry the
    fields at top level. A body that is missing, undecodable or not a
    JSON object yields an empty payload.
    """
    if "body" not in event:
        return dict(event)

    raw = event.get("body")
    if raw is None or raw == "":
        return {}
    if isinstance(raw, Mapping):
        return dict(raw)
    if not isinstance(raw, (str, bytes)):
        return {}

    if event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw)
        except (binascii.Error, ValueError):
            return {}

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return payload if isinstance(payload, dict) else {}


def get_request_id(event: Mapping[str, Any], context: Any = None) -> str:
    """Return the API Gateway request ID, falling back to the Lambda one."""
    request_context = event.get("requestContext") or {}
    req_id: Optional[str] = request_context.get("requestId")
    if req_id:
        return str(req_id)
    return str(getattr(context, "aws_request_id", "") or "")
