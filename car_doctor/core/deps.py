"""
FastAPI dependencies for data access and session authentication.

WHY: Route handlers declare what they need (a DAO, the caller's identity,
proof of ownership) and FastAPI resolves it per request. Keeping these in
one module means every protected route verifies the session the same way.
"""

import logging
from typing import Any, Dict

from fastapi import Depends, Request
from redis.exceptions import RedisError

from car_doctor.core.auth import verify_token, is_token_blacklisted
from car_doctor.core.config import settings
from car_doctor.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DatabaseError,
    TokenRevokedError,
)
from car_doctor.dao.checkout import CheckoutDAO
from car_doctor.dao.service import ServiceDAO
from car_doctor.db.session import get_database

logger = logging.getLogger(__name__)


# ============================================================================
# Data access
# ============================================================================


def get_service_dao(db: Any = Depends(get_database)) -> ServiceDAO:
    return ServiceDAO(db[settings.SERVICES_COLLECTION])


def get_checkout_dao(db: Any = Depends(get_database)) -> CheckoutDAO:
    return CheckoutDAO(db[settings.CHECKOUTS_COLLECTION])


# ============================================================================
# Session authentication
# ============================================================================


async def get_current_identity(request: Request) -> Dict[str, Any]:
    """
    Verify the session cookie and return its decoded payload.

    Steps:
    1. Read the session cookie (absent -> 401)
    2. Verify signature and expiry (failure -> 401)
    3. When revocation is enabled, reject deny-listed tokens (401)
    4. Attach the payload to ``request.state.identity``

    Usage:
        @router.get("/private")
        async def private(identity: dict = Depends(get_current_identity)):
            return {"uid": identity["uid"]}

    Args:
        request: Incoming request

    Returns:
        Decoded token payload

    Raises:
        AuthenticationError: If the cookie is missing, invalid, expired or revoked
    """
    token = request.cookies.get(settings.COOKIE_NAME)
    if not token:
        raise AuthenticationError(message="Unauthorized access", reason="missing_cookie")

    payload = verify_token(token)

    if settings.TOKEN_REVOCATION_ENABLED:
        try:
            revoked = await is_token_blacklisted(token)
        except RedisError:
            logger.exception("Token deny-list lookup failed")
            raise DatabaseError(store="redis")
        if revoked:
            raise TokenRevokedError(reason="logged_out")

    request.state.identity = payload
    return payload


async def require_owner(
    uid: str,
    identity: Dict[str, Any] = Depends(get_current_identity),
) -> Dict[str, Any]:
    """
    Ownership check for routes keyed by a ``{uid}`` path segment.

    Runs before the handler, so a mismatch never reaches the database.

    Args:
        uid: Owner identifier from the path
        identity: Verified session payload

    Returns:
        The session payload (guaranteed to belong to ``uid``)

    Raises:
        AuthenticationError: If the token carries no uid claim
        AuthorizationError: If the token's uid differs from the path uid
    """
    token_uid = identity.get("uid")
    if not token_uid:
        raise AuthenticationError(message="Invalid token: missing uid")

    if token_uid != uid:
        logger.warning(f"User {token_uid} attempted to read checkouts of {uid}")
        raise AuthorizationError(message="Forbidden access")

    return identity
