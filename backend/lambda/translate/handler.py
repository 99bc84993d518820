"""Lambda entrypoint for the translate endpoint."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from translate_proxy.api.translate import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the translate handler."""

    return _handler(event, context)
