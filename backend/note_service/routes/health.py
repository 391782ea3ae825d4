"""
Note Service — Health Check Routes
===================================

What:  Liveness and readiness endpoints for load balancers and monitoring.

    GET /api/heartbeat  → 204, process is up (no dependency checks)
    GET /health         → 200 with MongoDB connectivity; status "unhealthy"
                          when the database does not answer a ping
"""

import logging
import time

from fastapi import APIRouter, Request, Response

from note_service import __version__
from note_service.database import ping
from note_service.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/api/heartbeat", status_code=204, summary="Liveness probe")
async def heartbeat() -> Response:
    return Response(status_code=204)


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(request: Request) -> HealthResponse:
    client = getattr(request.app.state, "mongo_client", None)
    connected = client is not None and await ping(client)

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
