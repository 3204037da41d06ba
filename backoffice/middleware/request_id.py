"""
Tienda Back Office — Request ID Middleware
============================================

What:  Gives every request a short correlation id and returns it in a header.
Why:   Error bodies never carry internal detail; the id in X-Request-ID lets
       support find the full server-side log entry for a failed request.
How:   Reuses a client-provided X-Request-ID or generates one, stores it in a
       ContextVar for loggers and exception handlers, echoes it back.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same thread each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request id.

    Behavior:
        1. Use the client's X-Request-ID header if present
        2. Otherwise generate 8 hex chars from a UUID4
        3. Store in ContextVar and request.state
        4. Add X-Request-ID to the response
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
