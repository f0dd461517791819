"""Health check endpoints for monitoring and readiness probes."""

from datetime import datetime, timezone
import time

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/api", tags=["health"])

# Store API start time
START_TIME = time.time()


@router.get("/health")
async def health_check() -> JSONResponse:
    """
    Basic health check endpoint.

    Returns:
        JSON with status, timestamp and uptime information
    """
    uptime = int(time.time() - START_TIME)
    return JSONResponse({
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime_seconds": uptime,
        "service": "lolstats-api"
    })


@router.get("/readiness")
async def readiness_check(request: Request) -> Response:
    """
    Kubernetes-style readiness probe.

    Returns:
        200 once the application context is built
        503 otherwise
    """
    if getattr(request.app.state, "context", None) is None:
        return Response(status_code=503, content="Not ready: context not initialised")
    return Response(status_code=200, content="Ready")


@router.get("/liveness")
async def liveness_check() -> Response:
    """
    Kubernetes-style liveness probe.

    Returns:
        200 if service is alive
    """
    return Response(status_code=200, content="Alive")
