"""
Tienda Back Office — Request Logging Middleware
=================================================

What:  One access log line per HTTP request.
How:   Times the request and logs method, URL path, routed `path` parameter,
       status, duration, request id and client address.
When:  Runs inside RequestIDMiddleware, so the request id is already set.

Example line:
    PUT /api [products/7] 404 3.2ms [a1b2c3d4] from 127.0.0.1

What we log vs what we DON'T log (privacy):
    Logged:     method, path, ?path= value, status, duration, IP, request ID
    Not logged: request bodies (passwords on /api/login and user creation),
                cookies (session tokens)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from backoffice.middleware.request_id import request_id_var

logger = logging.getLogger("backoffice.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request at a level chosen by status class:
        5xx → ERROR, 4xx → WARNING, everything else → INFO
    /health is skipped; health checks would drown out real traffic.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        routed = request.query_params.get("path", "")
        rid = request_id_var.get("")

        if path == "/health":
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
            "%s %s [%s] %d %.1fms [%s] from %s",
            method,
            path,
            routed,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "routed_path": routed,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
