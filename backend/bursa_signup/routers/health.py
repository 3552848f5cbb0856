"""Health check endpoints for load balancers and monitoring."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from bursa_signup.auth.deps import get_bursa_api
from bursa_signup.auth import revocation
from bursa_signup.config import settings
from bursa_signup.services.bursa_api import BursaApiClient

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Lightweight health check (no Redis / Bursa API calls)."""
    return {
        "status": "ok",
        "service": "bursa-signup",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


@router.get("/health/ready")
async def readiness_check(bursa_api: BursaApiClient = Depends(get_bursa_api)):
    """Readiness: Redis answers and the Bursa API is reachable."""
    checks = {
        "service": "ok",
        "redis": "unknown",
        "bursa_api": "unknown",
    }
    overall_healthy = True

    try:
        redis_client = await revocation.get_redis()
        await redis_client.ping()
        checks["redis"] = "ok"
    except Exception as e:
        checks["redis"] = f"error: {str(e)[:100]}"
        overall_healthy = False

    if await bursa_api.ping():
        checks["bursa_api"] = "ok"
    else:
        checks["bursa_api"] = "unreachable"
        overall_healthy = False

    return JSONResponse(
        status_code=status.HTTP_200_OK if overall_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if overall_healthy else "unhealthy",
            "service": "bursa-signup",
            "checks": checks,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
