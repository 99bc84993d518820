"""Health check endpoint for monitoring and alerting.

Reports whether the translator configuration is complete. It never
calls the translation service, so a healthy result does not prove the
credentials are accepted upstream.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Optional

from translate_proxy.config import TranslatorSettings
from translate_proxy.config import load_settings
from translate_proxy.exceptions import AppError


@dataclass
class HealthCheck:
    """Result of a single health check."""

    name: str
    healthy: bool
    latency_ms: Optional[float] = None
    error: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "name": self.name,
            "healthy": self.healthy,
        }
        if self.latency_ms is not None:
            result["latency_ms"] = round(self.latency_ms, 2)
        if self.error:
            result["error"] = self.error
        if self.details:
            result["details"] = self.details
        return result


@dataclass
class HealthStatus:
    """Overall health status of the service."""

    healthy: bool
    checks: list[HealthCheck]
    version: str
    environment: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "healthy": self.healthy,
            "version": self.version,
            "environment": self.environment,
            "checks": [check.to_dict() for check in self.checks],
        }


def check_health(
    settings: Optional[TranslatorSettings] = None,
    include_details: bool = False,
) -> HealthStatus:
    """Perform all health checks and return overall status.

    Args:
        settings: Settings to inspect. Loaded from the environment if omitted.
        include_details: Whether to include detailed check information.
    """
    checks = [_check_configuration(settings)]

    overall_healthy = all(check.healthy for check in checks)

    return HealthStatus(
        healthy=overall_healthy,
        checks=checks if include_details else [],
        version=os.getenv("APP_VERSION", "unknown"),
        environment=os.getenv("ENVIRONMENT", "unknown"),
    )


def _check_configuration(settings: Optional[TranslatorSettings]) -> HealthCheck:
    """Check that the translator URL and API key are available."""
    start_time = time.perf_counter()

    try:
        if settings is None:
            settings = load_settings()
        settings.require_service_url()
        settings.resolve_api_key()
    except AppError as e:
        return HealthCheck(
            name="configuration",
            healthy=False,
            latency_ms=(time.perf_counter() - start_time) * 1000,
            error=e.message,
        )
    except Exception as e:
        return HealthCheck(
            name="configuration",
            healthy=False,
            latency_ms=(time.perf_counter() - start_time) * 1000,
            error=f"{type(e).__name__}: {e}",
        )

    return HealthCheck(
        name="configuration",
        healthy=True,
        latency_ms=(time.perf_counter() - start_time) * 1000,
        details={
            "model_id": settings.model_id,
            "api_version": settings.api_version,
            "error_mode": settings.error_mode.value,
            "api_key_source": "environment" if settings.api_key else "secret",
        },
    )


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda handler for health check endpoint.

    Args:
        event: API Gateway event.
        context: Lambda context.

    Returns:
        API Gateway response with health status.
    """
    from translate_proxy.utils.responses import json_response

    include_details = (event.get("queryStringParameters", {}) or {}).get(
        "details"
    ) == "true"

    status = check_health(include_details=include_details)

    # Return 200 for healthy, 503 for unhealthy
    status_code = 200 if status.healthy else 503

    return json_response(status_code, status.to_dict())
