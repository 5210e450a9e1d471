"""
RecipeBox Backend — Request Logging Middleware
=================================================

What:  One access log line per HTTP request, with status and duration.
How:   Times the downstream call and logs on the `recipebox.access` logger,
       with the fields also attached as `extra` for structured handlers.

Example line:
    2024-05-01T12:00:00 [INFO] recipebox.access: POST /api/saved/8d1e… 200 12.4ms [a1b2c3d4] from 10.0.0.7

Privacy:
    Request bodies are never logged; they carry passwords on /login and
    /register.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from recipebox.middleware.request_id import request_id_var

logger = logging.getLogger("recipebox.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status code, duration and request id.

    Level by status: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
    /health is not logged.
    """

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
