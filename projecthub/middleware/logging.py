"""
ProjectHub Backend — Request Logging Middleware
================================================

What:  One access-log line per HTTP request.
How:   Times the request, then logs method, path, status, duration, request
       id and the authenticated username (when the auth dependency attached
       one). Level follows the status class: 5xx ERROR, 4xx WARNING, else INFO.

Not logged: request bodies and the Authorization header.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from projecthub.middleware.request_id import request_id_var

logger = logging.getLogger("projecthub.access")

QUIET_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        user = getattr(request.state, "user", None)
        username = user.username if user is not None else "-"
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        status = response.status_code

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] user=%s from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            username,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "username": username,
            },
        )
        return response
