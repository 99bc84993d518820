"""Custom exception classes for the translate proxy.

This module provides domain-specific exception classes that carry
appropriate HTTP status codes and structured error information.
"""

from __future__ import annotations

from typing import Any
from typing import Optional


class AppError(Exception):
    """Base exception for application errors.

    All application-specific exceptions should inherit from this class.
    Each exception carries an HTTP status code and optional details.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code (default 500).
        detail: Optional additional context.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response body."""
        result: dict[str, Any] = {"error": self.message}
        if self.detail:
            result["detail"] = self.detail
        return result


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None):
        detail = f"Field: {field}" if field else None
        super().__init__(message, status_code=400, detail=detail)
        self.field = field


class ConfigurationError(AppError):
    """Raised when required configuration is missing or invalid.

    Use when environment variables or settings are not properly configured.
    """

    def __init__(self, config_name: str, reason: Optional[str] = None):
        message = (
            f"Invalid configuration: {config_name}"
            if reason
            else f"Missing required configuration: {config_name}"
        )
        super().__init__(message, status_code=500, detail=reason)
        self.config_name = config_name


class TranslationServiceError(AppError):
    """Raised when the translation service call fails.

    Covers network errors, authentication rejections and service-side
    errors. ``upstream_status`` is the HTTP status returned by the
    service, or None when no response was received.
    """

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message, status_code=502, detail=detail)
        self.upstream_status = upstream_status
