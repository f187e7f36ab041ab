"""Request logging middleware."""
import logging
import time
from typing import Any, Callable, Mapping
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger("relay.server")
SENSITIVE_FIELDS = frozenset({"secret", "clientid", "hostsecret", "host_secret", "authorization"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs HTTP requests and their outcome. WebSocket traffic passes through."""

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:
        start_time = time.perf_counter()
        client = request.client.host if request.client else "unknown"
        query = sanitize_dict(dict(request.query_params))
        if query:
            logger.info("Request: %s %s client=%s query=%s", request.method, request.url.path, client, query)
        else:
            logger.info("Request: %s %s client=%s", request.method, request.url.path, client)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info("Response: %s %s status=%d duration=%.2fms", request.method, request.url.path, response.status_code, duration_ms)
        return response


def sanitize_dict(data: Mapping[str, Any]) -> dict[str, Any]:
    """Remove sensitive fields from a dictionary for logging."""
    result = {}
    for key, value in data.items():
        lower_key = key.lower()
        if lower_key in SENSITIVE_FIELDS:
            result[key] = "[REDACTED]"
        elif isinstance(value, Mapping):
            result[key] = sanitize_dict(value)
        else:
            result[key] = value
    return result
