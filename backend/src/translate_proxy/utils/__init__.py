"""Utility modules for the translate proxy."""

from translate_proxy.utils.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    mask_pii,
    set_request_context,
)
from translate_proxy.utils.parsers import get_request_id, parse_json_body
from translate_proxy.utils.responses import error_response, json_response

__all__ = [
    "clear_request_context",
    "configure_logging",
    "error_response",
    "get_logger",
    "get_request_id",
    "json_response",
    "mask_pii",
    "parse_json_body",
    "set_request_context",
]
