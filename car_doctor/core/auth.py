"""
JWT session tokens.

WHY: This module owns every cryptographic step of the session lifecycle:
1. Signing a user payload into a JWT with a 1-hour expiry
2. Verifying signature and expiry of a presented token
3. Optional Redis deny-list so logout can revoke a token server side
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

import redis.asyncio as aioredis
from jose import jwt, JWTError, ExpiredSignatureError

from car_doctor.core.config import settings
from car_doctor.core.exceptions import (
    TokenExpiredError,
    TokenInvalidError,
    TokenSigningError,
)

logger = logging.getLogger(__name__)


# Redis connection for the token deny-list
# Only created when TOKEN_REVOCATION_ENABLED is set.
_redis_client: Optional[aioredis.Redis] = None


async def get_redis() -> aioredis.Redis:
    """
    Get Redis client for the token deny-list.

    The client is created lazily on first use and reused afterwards.

    Returns:
        Redis client instance
    """
    global _redis_client
    if _redis_client is None:
        _redis_client = aioredis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis_client


# ============================================================================
# JWT Token Management
# ============================================================================


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign a session payload into a JWT.

    Token includes the caller's payload (which carries ``uid``) plus:
    - exp: Expiration time (default: JWT_EXPIRATION_MINUTES, 1 hour)
    - iat: Issued at time
    - nbf: Not before time

    Args:
        data: Session payload to encode
        expires_delta: Optional custom expiration time

    Returns:
        JWT token string

    Raises:
        TokenSigningError: If the payload cannot be signed

    Example:
        >>> token = create_access_token({"uid": "u1"})
        >>> verify_token(token)["uid"]
        'u1'
    """
    to_encode = data.copy()

    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)

    to_encode.update(
        {
            "exp": expire,
            "iat": now,
            "nbf": now,
        }
    )

    try:
        return jwt.encode(
            to_encode,
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
    except (JWTError, TypeError, ValueError) as e:
        logger.exception("Failed to sign session token")
        raise TokenSigningError(error=str(e))


def verify_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode a JWT.

    Checks the signature against JWT_SECRET, the algorithm, and that an
    unexpired ``exp`` claim is present.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload

    Raises:
        TokenExpiredError: If token has expired
        TokenInvalidError: If token is malformed, unsigned by us or lacks exp
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require_exp": True},
        )

    except ExpiredSignatureError:
        raise TokenExpiredError(message="Token has expired")

    except JWTError as e:
        raise TokenInvalidError(
            message="Invalid token",
            error=str(e),
        )


def remaining_lifetime(claims: Dict[str, Any]) -> int:
    """
    Seconds until a verified token's ``exp`` claim.

    Never negative and never longer than a freshly issued session, so a
    deny-list entry cannot outlive the tokens this service signs.

    Args:
        claims: Payload returned by verify_token

    Returns:
        Remaining lifetime in seconds
    """
    exp_timestamp = claims.get("exp")
    if isinstance(exp_timestamp, bool) or not isinstance(exp_timestamp, (int, float)):
        return 0

    remaining = int(exp_timestamp - datetime.now(timezone.utc).timestamp())
    return min(max(remaining, 0), settings.jwt_expiration_seconds)


# ============================================================================
# Token Deny-list (Logout)
# ============================================================================


async def blacklist_token(token: str, ttl_seconds: int) -> None:
    """
    Add a verified token to the deny-list.

    Entries expire together with the token, so the list never outgrows the
    set of still-valid tokens. A non-positive TTL stores nothing.

    Args:
        token: JWT token to revoke (already verified by the caller)
        ttl_seconds: Seconds the entry is kept, see remaining_lifetime
    """
    if ttl_seconds <= 0:
        return

    redis = await get_redis()
    await redis.setex(f"blacklist:token:{token}", ttl_seconds, "1")


async def is_token_blacklisted(token: str) -> bool:
    """
    Check if a token is on the deny-list.

    Args:
        token: JWT token to check

    Returns:
        True if token was revoked, False otherwise
    """
    redis = await get_redis()
    exists = await redis.exists(f"blacklist:token:{token}")
    return exists > 0
