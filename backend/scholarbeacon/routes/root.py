"""
ScholarBeacon Backend: Liveness and Health Routes
=================================================

What:  GET / answers with plain text as long as the process is up.
       GET /health additionally pings MongoDB and reports whether Stripe is
       configured.
Who:   Uptime monitors, load balancer probes, humans with a browser.
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from scholarbeacon import __version__
from scholarbeacon.database import ping
from scholarbeacon.schemas.api import HealthResponse
from scholarbeacon.services.payment_service import payment_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness placeholder")
async def root() -> str:
    return "Scholarship is coming soon"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Pings MongoDB and reports Stripe configuration.",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Status is "unhealthy" when the database does not answer a ping; an
    unconfigured Stripe key is reported but does not change the status.
    """
    client = getattr(request.app.state, "mongo_client", None)
    database_ok = client is not None and await ping(client)
    if not database_ok:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if database_ok else "unhealthy",
        version=__version__,
        database="connected" if database_ok else "disconnected",
        payments="configured" if payment_service.is_configured() else "not_configured",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
