"""Access logging middleware for FastAPI.

Logs every API request with:
- Role of the session (from request state, set by get_session)
- Action (HTTP method mapped to a CRUD verb)
- Module (first path segment after the /api prefix)
- Response status and duration
- Client IP address

Denied requests (401/403) are logged at WARNING, everything else at INFO.
The reason for a denial is never logged here.
"""

import logging
import time
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


# Map HTTP methods to action names
METHOD_TO_ACTION = {
    "GET": "read",
    "HEAD": "read",
    "POST": "create",
    "PUT": "update",
    "PATCH": "update",
    "DELETE": "delete",
}

# Paths that should not be logged
EXCLUDED_PATHS = {
    "/health",
    "/health/live",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
}


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        # First entry is the original client
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"


def extract_module(path: str) -> Optional[str]:
    """First path segment after the api prefix, e.g. /api/roles/admin -> roles."""
    parts = [p for p in path.strip("/").split("/") if p]
    if parts and parts[0] == "api":
        parts = parts[1:]
    return parts[0] if parts else None


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Writes one log line per API request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in EXCLUDED_PATHS:
            return await call_next(request)

        start_time = time.monotonic()
        response = await call_next(request)
        duration_ms = int((time.monotonic() - start_time) * 1000)

        session = getattr(request.state, "session", None)
        role = session.role if session is not None else None
        action = METHOD_TO_ACTION.get(request.method, request.method.lower())
        level = logging.WARNING if response.status_code in (401, 403) else logging.INFO

        logger.log(
            level,
            "%s %s module=%s action=%s role=%s status=%d duration_ms=%d ip=%s",
            request.method,
            request.url.path,
            extract_module(request.url.path),
            action,
            role or "anonymous",
            response.status_code,
            duration_ms,
            get_client_ip(request),
        )
        return response
