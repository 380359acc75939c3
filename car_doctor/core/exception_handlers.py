"""
Error responses for the Car Doctor API.

Every failure, whether raised by a route, by the session cookie check, by
request parsing or by the router itself, leaves the API as the same body:

    {"error": <kind>, "message": <text>, "status_code": <int>, "details": ...}

Server-side failures (MongoDB driver errors, malformed service ids, token
signing) are logged with the request id from the request logger and reach
the client only as "Internal server error".
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from car_doctor.core.exceptions import AppException

logger = logging.getLogger(__name__)


def _request_label(request: Request) -> str:
    """``METHOD path`` plus the request id when the request logger is on."""
    label = f"{request.method} {request.url.path}"
    context = getattr(request.state, "context", None)
    if context is not None:
        label = f"{label} [{context.request_id}]"
    return label


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Render an AppException (401 session, 403 owner mismatch, 404 lookup,
    500 database or identifier failure).

    For 5xx the context kept on the exception goes to the log only.
    """
    if exc.status_code >= 500:
        logger.error(
            f"{_request_label(request)} failed: "
            f"{exc.__class__.__name__}: {exc.message} {exc.context}"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Reject a checkout or session body that fails its schema (e.g. no uid).

    Returns:
        400 with one entry per offending field under details.errors
    """
    errors = []
    for error in exc.errors():
        errors.append(
            {
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            }
        )

    return JSONResponse(
        status_code=400,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "status_code": 400,
            "details": {"errors": errors},
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown paths and wrong methods, answered by the router."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "HTTPException",
            "message": exc.detail,
            "status_code": exc.status_code,
            "details": None,
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last resort for anything not mapped above.

    The traceback is logged under the request label; the body is the same
    generic 500 a DatabaseError produces.
    """
    logger.error(
        f"Unhandled error on {_request_label(request)}",
        exc_info=(type(exc), exc, exc.__traceback__),
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": "InternalServerError",
            "message": "Internal server error",
            "status_code": 500,
            "details": None,
        },
    )
