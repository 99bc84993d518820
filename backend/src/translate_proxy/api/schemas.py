"""Pydantic schemas for translate requests."""

from __future__ import annotations

from typing import Any
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import field_validator


class TranslateRequest(BaseModel):
    """Inbound translate payload.

    Only ``input`` is consumed. A non-string ``input`` is treated as
    absent so the handler falls back to its default text.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    input: Optional[str] = None

    @field_validator("input", mode="before")
    @classmethod
    def _drop_non_string(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None
