"""Health and error envelope schemas shared by every router."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class HealthResponse(BaseModel):
    """Liveness probe body. Never touches Supabase or Stripe."""

    model_config = ConfigDict(from_attributes=True)

    status: HealthStatus = Field(description="Current health status")
    service: str = Field(default="foodista-backend", description="Service name")
    environment: str = Field(default="development", description="Deployment environment")
    version: str = Field(default="0.1.0", description="API version")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp")


class CheckResult(BaseModel):
    """Outcome of probing one dependency (database or payment provider)."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(description="Dependency name")
    healthy: bool = Field(description="Whether the dependency is usable")
    latency_ms: float | None = Field(default=None, description="Probe round trip in milliseconds")
    error: str | None = Field(default=None, description="Why the dependency is unusable")


class ReadinessResponse(BaseModel):
    """Readiness probe body.

    ``status`` is unhealthy, and the route answers 503, as soon as any
    check fails.
    """

    model_config = ConfigDict(from_attributes=True)

    status: HealthStatus = Field(description="Overall readiness status")
    stripe_test_mode: bool = Field(default=False, description="Whether Stripe test keys are in use")
    checks: list[CheckResult] = Field(default_factory=list, description="Individual check results")
    timestamp: datetime = Field(default_factory=_utcnow, description="Check timestamp")


class ErrorDetail(BaseModel):
    """One field-level problem, usually from request body validation."""

    model_config = ConfigDict(from_attributes=True)

    loc: list[str] | None = Field(default=None, description="Path to the offending field, e.g. body.cart_items.0.quantity")
    msg: str = Field(description="Human-readable error message")
    type: str = Field(description="Error type identifier")


class ErrorResponse(BaseModel):
    """Body of every non-2xx JSON response.

    Mirrors the success bodies' ``success`` flag so the web client can
    branch on it before looking at ``message``.
    """

    model_config = ConfigDict(from_attributes=True)

    success: bool = Field(default=False, description="Always false for errors")
    error: str = Field(description="Error category, e.g. not_found or payment_provider_error")
    message: str = Field(description="Message safe to show to the user")
    details: list[ErrorDetail] | None = Field(default=None, description="Field-level problems, if any")
    request_id: str | None = Field(default=None, description="X-Request-ID of the failed request")
    timestamp: datetime = Field(default_factory=_utcnow, description="When the error was produced")

    @classmethod
    def from_exception(
        cls,
        error_type: str,
        message: str,
        details: list[dict[str, Any]] | None = None,
        request_id: str | None = None,
    ) -> "ErrorResponse":
        """Build the envelope from an APIError's parts.

        Args:
            error_type: Error category.
            message: User-facing message.
            details: Raw detail dicts with optional loc, msg and type keys.
            request_id: Request ID for tracing.

        Returns:
            ErrorResponse: The envelope.
        """
        return cls(
            error=error_type,
            message=message,
            details=[_to_detail(d) for d in details] if details else None,
            request_id=request_id,
        )


def _to_detail(raw: dict[str, Any]) -> ErrorDetail:
    loc = raw.get("loc")
    return ErrorDetail(
        loc=[str(part) for part in loc] if loc else None,
        msg=raw.get("msg", str(raw)),
        type=raw.get("type", "error"),
    )
