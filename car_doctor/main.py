"""
Main FastAPI application.

WHY: This is the entry point for the application. It configures middleware,
routes, exception handlers and the MongoDB client.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from car_doctor.core.config import settings
from car_doctor.core.exceptions import AppException
from car_doctor.core.exception_handlers import (
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    generic_exception_handler,
)
from car_doctor.core.logging_config import setup_logging
from car_doctor.db.session import create_mongo_client, get_database, ping_database
from car_doctor.middleware import RequestContextMiddleware
from car_doctor.api import auth, checkouts, services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan.

    Startup pings MongoDB; failure is logged, never fatal. Shutdown closes
    the connection pool.
    """
    db = app.state.mongo_client[settings.MONGO_DB_NAME]
    if await ping_database(db):
        logger.info(f"Connected to MongoDB database '{settings.MONGO_DB_NAME}'")
    else:
        logger.error("MongoDB is unreachable; API routes will fail until it recovers")

    yield

    await app.state.mongo_client.close()


def create_app(mongo_client: Any = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Routes are registered unconditionally; a database that is unreachable at
    startup is logged and only affects the requests that need it.

    Args:
        mongo_client: Pre-built MongoDB client (defaults to one built from MONGO_URL)

    Returns:
        Configured FastAPI application instance
    """
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Car service booking API",
        version=settings.VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    if mongo_client is None:
        mongo_client = create_mongo_client(settings)
    app.state.mongo_client = mongo_client

    # Register exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Request logger (method, host, path, client IP)
    if settings.REQUEST_LOGGING:
        app.add_middleware(RequestContextMiddleware)

    # Configure CORS
    # Credentials are allowed so the browser sends the session cookie.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["health"])
    async def health_check(db: Any = Depends(get_database)) -> dict:
        """Service health, including whether MongoDB answers a ping."""
        database_ok = await ping_database(db)
        return {
            "status": "healthy",
            "version": settings.VERSION,
            "database": "connected" if database_ok else "unavailable",
        }

    @app.get("/", tags=["root"], response_class=PlainTextResponse)
    async def root() -> str:
        return "Hello from Car Doctor"

    # Register API routers
    app.include_router(services.router, prefix=settings.API_PREFIX)
    app.include_router(checkouts.router, prefix=settings.API_PREFIX)
    app.include_router(auth.router, prefix=settings.API_PREFIX)

    return app


# Create app instance for `uvicorn car_doctor.main:app`
app = create_app()


def run() -> None:
    """Console entry point: serve the app on SERVER_HOST:SERVER_PORT."""
    import uvicorn

    logger.info(f"Car Doctor is running on {settings.SERVER_PORT}")
    uvicorn.run(
        "car_doctor.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG,
        log_level="info" if settings.DEBUG else "warning",
    )


if __name__ == "__main__":
    run()
