"""
Request logger middleware.

WHAT: Middleware that records method, host, path and client address of
every request.

HOW: Logs one line per request at INFO, keeps the captured context on
``request.state.context`` so error handlers can tag their log lines with
the same request id, and echoes that id in the ``X-Request-ID`` header.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """
    Request-scoped data captured on entry.

    Fields:
    - request_id: Unique identifier for the request (for log correlation)
    - ip_address: Client's IP (considering proxies)
    - host: Host header the client addressed
    - path: Request path
    - method: HTTP method (GET, POST, etc.)
    """

    request_id: str
    ip_address: str
    host: Optional[str]
    path: str
    method: str


def get_client_ip(request: Request) -> str:
    """
    Extract the client IP address from a request.

    Checks, in order: X-Real-IP, the first entry of X-Forwarded-For, then
    the direct connection address.

    Args:
        request: The incoming request

    Returns:
        Client IP address as string ("unknown" if none is available)
    """
    x_real_ip = request.headers.get("X-Real-IP")
    if x_real_ip:
        return x_real_ip.strip()

    # Format: "client, proxy1, proxy2"
    x_forwarded_for = request.headers.get("X-Forwarded-For")
    if x_forwarded_for:
        return x_forwarded_for.split(",")[0].strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


def get_host(request: Request) -> Optional[str]:
    """Host header of the request, if any."""
    return request.headers.get("Host")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs each request and tags its response.

    Log format: ``<METHOD> <host> <path> from <client ip> [<request id>]``
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Log the request, process it and tag the response.

        Args:
            request: Incoming request
            call_next: Next middleware/handler

        Returns:
            Response with request ID header added
        """
        context = RequestContext(
            request_id=str(uuid.uuid4()),
            ip_address=get_client_ip(request),
            host=get_host(request),
            path=request.url.path,
            method=request.method,
        )

        logger.info(
            f"{context.method} {context.host} {context.path} "
            f"from {context.ip_address} [{context.request_id}]"
        )

        request.state.context = context
        response = await call_next(request)
        response.headers["X-Request-ID"] = context.request_id
        return response
