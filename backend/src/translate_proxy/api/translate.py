"""Lambda handler for the translate endpoint.

Accepts ``{"input": "..."}``, forwards the text once to the Language
Translator service and relays the service payload as the response body.

Outbound failures never escape the handler. How they reach the caller is
decided by ``TRANSLATE_ERROR_MODE``:

``strict`` (default)
    The error status (502 for service failures, 500 for configuration
    errors) with an ``{"error", "detail"}`` body.
``legacy``
    HTTP 200 with an empty body, matching the behavior of the function
    before the migration.
"""

from __future__ import annotations

import time
from typing import Any
from typing import Mapping
from typing import Optional

from translate_proxy.api.schemas import TranslateRequest
from translate_proxy.config import ErrorMode
from translate_proxy.config import TranslatorSettings
from translate_proxy.config import load_settings
from translate_proxy.exceptions import AppError
from translate_proxy.services.translator import LanguageTranslatorClient
from translate_proxy.services.translator import TranslationFailure
from translate_proxy.services.translator import TranslationQuery
from translate_proxy.utils import error_response
from translate_proxy.utils import get_request_id
from translate_proxy.utils import json_response
from translate_proxy.utils import parse_json_body
from translate_proxy.utils.logging import clear_request_context
from translate_proxy.utils.logging import configure_logging
from translate_proxy.utils.logging import get_logger
from translate_proxy.utils.logging import log_lambda_event
from translate_proxy.utils.logging import log_response
from translate_proxy.utils.logging import mask_pii
from translate_proxy.utils.logging import set_request_context

# Configure logging on module load
configure_logging()
logger = get_logger(__name__)

DEFAULT_INPUT_TEXT = "Hello, world"


class TranslateProxyHandler:
    """Stateless translate handler bound to fixed settings and a client."""

    def __init__(
        self,
        settings: TranslatorSettings,
        client: Optional[LanguageTranslatorClient] = None,
    ) -> None:
        self.settings = settings
        self.client = client or LanguageTranslatorClient(settings)

    def build_query(self, request: TranslateRequest) -> TranslationQuery:
        """Build the outbound query; absent input falls back to the default."""
        text = request.input if request.input is not None else DEFAULT_INPUT_TEXT
        return TranslationQuery(text=text, model_id=self.settings.model_id)

    def handle(self, event: Mapping[str, Any]) -> dict[str, Any]:
        """Translate the event's input and build the API Gateway response."""
        log_lambda_event(logger, event)

        try:
            request = TranslateRequest.model_validate(parse_json_body(event))
            query = self.build_query(request)
            logger.debug(
                "Translate query built",
                extra={
                    "text_preview": mask_pii(query.text),
                    "used_default": request.input is None,
                },
            )
            outcome = self.client.translate_outcome(query)
        except Exception:  # pragma: no cover - safety net
            logger.exception("Unexpected error in translate")
            return self.failure_response(AppError("Internal server error"))

        if isinstance(outcome, TranslationFailure):
            error = outcome.error
            logger.error(
                f"Translation failed: {error.message}",
                extra={
                    "error_type": type(error).__name__,
                    "upstream_status": getattr(error, "upstream_status", None),
                    "detail": error.detail,
                },
            )
            return self.failure_response(error)

        return json_response(200, outcome.result)

    def failure_response(self, error: AppError) -> dict[str, Any]:
        """Map a failure to a response according to the error mode."""
        if self.settings.error_mode is ErrorMode.LEGACY:
            return json_response(200, None)
        return error_response(error.status_code, error.message, error.detail)


_HANDLER: Optional[TranslateProxyHandler] = None


def get_handler() -> TranslateProxyHandler:
    """Return the process-wide handler, building it from the environment once."""
    global _HANDLER
    if _HANDLER is None:
        _HANDLER = TranslateProxyHandler(load_settings())
    return _HANDLER


def reset_handler(handler: Optional[TranslateProxyHandler] = None) -> None:
    """Replace or clear the cached handler (useful in tests)."""
    global _HANDLER
    _HANDLER = handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Handle an API Gateway (or direct) translate invocation."""

    # Direct invocations may carry any JSON value; only objects hold input.
    if not isinstance(event, Mapping):
        event = {}

    set_request_context(req_id=get_request_id(event, context))
    start_time = time.perf_counter()

    try:
        try:
            handler = get_handler()
        except AppError as exc:
            logger.error(f"Translate handler misconfigured: {exc.message}")
            response = json_response(exc.status_code, exc.to_dict())
        else:
            response = handler.handle(event)

        log_response(
            logger,
            response["statusCode"],
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return response
    finally:
        clear_request_context()
