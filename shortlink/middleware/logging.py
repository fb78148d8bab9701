"""
Request logging middleware for FastAPI using Loguru.

Every request produces one REQUEST-level record with the method, path,
status code and processing time. The generated request id is returned to
the caller in the X-Request-ID header.
"""

import time
import uuid
from contextvars import ContextVar

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from shortlink.core.logging import REQUEST_LEVEL

# Context variable to store request ID across async context
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def _client_ip(request: Request) -> str:
    client_ip = request.client.host if request.client else "unknown"
    if "X-Forwarded-For" in request.headers:
        forwarded_ips = request.headers["X-Forwarded-For"].split(",")
        if forwarded_ips and forwarded_ips[0].strip():
            client_ip = forwarded_ips[0].strip()
    return client_ip


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each HTTP request once it has been answered."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = str(uuid.uuid4())
        request_id_var.set(request_id)

        start_time = time.perf_counter()
        response = await call_next(request)
        process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)

        response.headers["X-Request-ID"] = request_id

        logger.bind(
            request_id=request_id,
            client_ip=_client_ip(request),
        ).log(
            REQUEST_LEVEL,
            "{} {} {} {}ms",
            request.method,
            request.url.path,
            response.status_code,
            process_time_ms,
        )
        return response
