"""
RecipeBox Backend — Service Routes (Home Page and Health Check)
=================================================================

What:  GET / (welcome page) and GET /health (monitoring probe).
How:   /health runs SELECT 1 against the database and reports uptime.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response, status
from fastapi.responses import HTMLResponse
from sqlalchemy import text

from recipebox import __version__
from recipebox.database import engine
from recipebox.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def home() -> str:
    return '<h1 align="center">Welcome to the RecipeBox Backend</h1>'


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
