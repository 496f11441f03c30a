"""
HairBook Backend — Request Logging Middleware
===============================================

What:  One access-log line per HTTP request.
How:   Times the request, then logs method, path, status, duration, request
       ID and client IP on the `hairbook.access` logger. Structured fields
       are also passed via `extra` for JSON formatters.
Who:   Applied to every request, inside RequestIDMiddleware.

Privacy:
    Logged: method, path, status, duration, client IP, request ID
    Never logged: request bodies (passwords, coordinates), Authorization header
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("hairbook.access")

# Probed by load balancers every few seconds
QUIET_PATHS = frozenset({"/", "/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request's outcome and duration.

    Duration covers everything downstream of this middleware: auth gate,
    body validation, bcrypt, database round-trips and serialization.
    Liveness and health probes are not logged.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        status = response.status_code

        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
