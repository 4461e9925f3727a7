"""Health check endpoints for monitoring and deployment verification."""

import time

from fastapi import APIRouter, Response, status

from src.api.deps import PaymentGatewayDep, SettingsDep, SupabaseDep
from src.core.supabase import check_database_connection
from src.schemas.common import CheckResult, HealthResponse, HealthStatus, ReadinessResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Basic health check to verify the service is running. Used for liveness probes.",
)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Return basic health status.

    This endpoint should always return 200 if the service is running.
    It does not check external dependencies.

    Returns:
        HealthResponse: Current health status, service name and environment.
    """
    return HealthResponse(
        status=HealthStatus.HEALTHY,
        service=settings.app_name,
        environment=settings.app_env,
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "All dependencies healthy"},
        503: {"description": "One or more dependencies unhealthy"},
    },
    summary="Readiness check",
    description="Check if all dependencies are available. Used for readiness probes.",
)
async def readiness_check(
    response: Response,
    client: SupabaseDep,
    gateway: PaymentGatewayDep,
    settings: SettingsDep,
) -> ReadinessResponse:
    """Check readiness of all dependencies.

    Verifies that the service can handle requests by checking:
    - Database connectivity (Supabase)
    - Stripe configuration (API key and webhook secret present)

    Returns 503 if any dependency is unhealthy.

    Args:
        response: FastAPI response object for setting status code.
        client: Supabase client.
        gateway: Payment gateway.
        settings: Application settings.

    Returns:
        ReadinessResponse: Status of all dependency checks.
    """
    checks: list[CheckResult] = []

    start_time = time.perf_counter()
    db_result = await check_database_connection(client)
    latency_ms = (time.perf_counter() - start_time) * 1000

    checks.append(
        CheckResult(
            name="database",
            healthy=db_result["healthy"],
            latency_ms=round(latency_ms, 2),
            error=db_result.get("error"),
        )
    )

    stripe_error = None
    if not gateway.is_configured:
        stripe_error = "STRIPE_SECRET_KEY not configured"
    elif not gateway.webhook_secret:
        stripe_error = "STRIPE_WEBHOOK_SECRET not configured"

    checks.append(
        CheckResult(
            name="stripe",
            healthy=stripe_error is None,
            error=stripe_error,
        )
    )

    all_healthy = all(check.healthy for check in checks)
    overall_status = HealthStatus.HEALTHY if all_healthy else HealthStatus.UNHEALTHY

    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status=overall_status,
        stripe_test_mode=settings.is_stripe_test_mode,
        checks=checks,
    )
