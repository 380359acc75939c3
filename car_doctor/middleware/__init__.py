"""
Middleware package.

Cross-cutting request handling applied to every route.
"""

from car_doctor.middleware.request_context import (
    RequestContextMiddleware,
    get_client_ip,
    get_host,
    RequestContext,
)

__all__ = [
    "RequestContextMiddleware",
    "get_client_ip",
    "get_host",
    "RequestContext",
]
