"""
MongoDB client management.

WHY: One AsyncMongoClient is built by the application factory and kept on
``app.state``; request handlers reach it only through the ``get_database``
dependency. Nothing in the codebase holds the client in a module global,
and tests hand a fake client to the application factory.
"""

import logging
from typing import Any

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from car_doctor.core.config import Settings, settings

logger = logging.getLogger(__name__)


def create_mongo_client(app_settings: Settings) -> AsyncMongoClient:
    """
    Create the process-wide MongoDB client.

    The driver connects lazily and pools connections internally, so
    construction never blocks or fails on an unreachable server.

    Args:
        app_settings: Settings carrying MONGO_URL and the server selection
            timeout, so calls against a down server fail fast

    Returns:
        AsyncMongoClient instance
    """
    return AsyncMongoClient(
        app_settings.MONGO_URL,
        connect=False,
        serverSelectionTimeoutMS=app_settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
    )


async def ping_database(db: Any) -> bool:
    """
    Run the ``ping`` admin command.

    Returns:
        True when the server answered, False otherwise (the error is logged)
    """
    try:
        await db.command("ping")
        return True
    except PyMongoError as e:
        logger.error(f"MongoDB ping failed: {e}")
        return False


def get_database(request: Request) -> Any:
    """
    Dependency returning the configured database handle.

    Args:
        request: Incoming request (gives access to app.state)

    Returns:
        AsyncDatabase for MONGO_DB_NAME
    """
    return request.app.state.mongo_client[settings.MONGO_DB_NAME]
