"""
Health Routes

Endpoints:
    GET /health        - Overall status with an upstream connectivity check
    GET /health/live   - Liveness (process is up)
    GET /health/ready  - Readiness (upstream reachable)
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..config import GatewaySettings, get_settings
from ..dependencies import get_hrms_client
from ..filters import format_rfc3339
from ..gateway import HRMSClient, HRMSError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def _now() -> str:
    return format_rfc3339(datetime.now(timezone.utc))


@router.get("/health")
async def health_check(
    client: HRMSClient = Depends(get_hrms_client),
    settings: GatewaySettings = Depends(get_settings),
):
    """
    Report gateway health.

    Returns 200 with status "healthy" when the upstream answers the probe,
    otherwise 503 with status "degraded" and the probe error.
    """
    checks = {"api": "healthy"}
    status_code = 200
    status = "healthy"

    try:
        await client.health(timeout=settings.health_timeout_seconds)
        checks["hubhrms"] = "healthy"
    except HRMSError as e:
        logger.warning(f"Health check failed: {e}")
        checks["hubhrms"] = "unhealthy"
        checks["hubhrms_error"] = str(e)
        status = "degraded"
        status_code = 503

    return JSONResponse(
        status_code=status_code,
        content={"status": status, "timestamp": _now(), "checks": checks},
    )


@router.get("/health/live")
async def liveness():
    return {"status": "alive", "timestamp": _now()}


@router.get("/health/ready")
async def readiness(
    client: HRMSClient = Depends(get_hrms_client),
    settings: GatewaySettings = Depends(get_settings),
):
    try:
        await client.health(timeout=settings.readiness_timeout_seconds)
    except HRMSError as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not ready",
                "reason": "Hub-HRMS unreachable",
                "error": str(e),
            },
        )
    return {"status": "ready", "timestamp": _now()}
