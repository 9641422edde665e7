"""Health check and metrics endpoints."""

import time

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from relay import __version__
from relay.api.dependencies import ChannelDep, CompletionClientDep, SessionStoreDep
from relay.api.models.health import ComponentHealth, HealthResponse, HealthStatus
from relay.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


async def _check(name: str, probe) -> ComponentHealth:
    start = time.perf_counter()
    healthy = await probe()
    latency_ms = (time.perf_counter() - start) * 1000
    return ComponentHealth(
        name=name,
        status="healthy" if healthy else "unhealthy",
        latency_ms=latency_ms,
        message=None if healthy else f"{name} check failed",
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(
    session_store: SessionStoreDep,
    completion_client: CompletionClientDep,
    channel: ChannelDep,
) -> HealthResponse:
    """Report the service status and the status of each component.

    The session store is critical; the completion client only degrades.
    """
    components = [
        await _check("session_store", session_store.health_check),
        await _check("completion_client", completion_client.health_check),
        ComponentHealth(name=f"channel:{channel.channel_name}", status="healthy"),
    ]

    status: HealthStatus = "healthy"
    if components[0].status == "unhealthy":
        status = "unhealthy"
    elif any(c.status == "unhealthy" for c in components):
        status = "degraded"

    logger.debug("health_check_completed", status=status)
    return HealthResponse(status=status, version=__version__, components=components)


@router.get("/metrics")
async def get_metrics() -> Response:
    """Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
