"""
Session API endpoints.

WHY: These endpoints drive the cookie session:
1. /jwt - Sign the caller's identity and set it as an http-only cookie
2. /logout - Clear the cookie (and revoke the token when enabled)

Cookie attributes: HttpOnly, SameSite=Strict, Secure from COOKIE_SECURE.
"""

import logging

from fastapi import APIRouter, Request, Response, status
from redis.exceptions import RedisError

from car_doctor.core.auth import (
    blacklist_token,
    create_access_token,
    remaining_lifetime,
    verify_token,
)
from car_doctor.core.config import settings
from car_doctor.core.exceptions import AuthenticationError
from car_doctor.schemas.auth import SessionRequest, SessionResponse

logger = logging.getLogger(__name__)


router = APIRouter(tags=["authentication"])


def _set_session_cookie(response: Response, value: str, max_age: int) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=value,
        max_age=max_age,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="strict",
    )


@router.post(
    "/jwt",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Start session",
    description="Sign the submitted identity into a session cookie valid for one hour",
)
async def issue_session(payload: SessionRequest, response: Response) -> SessionResponse:
    """
    Issue a session token.

    The whole body (uid plus any extra fields) becomes the token payload.

    Args:
        payload: Identity to sign
        response: Outgoing response (receives the cookie)

    Returns:
        {"success": true}

    Raises:
        TokenSigningError (500): If the token cannot be signed
    """
    token = create_access_token(payload.model_dump())
    _set_session_cookie(response, token, settings.jwt_expiration_seconds)
    logger.info(f"Issued session for user {payload.uid}")
    return SessionResponse()


@router.post(
    "/logout",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="End session",
    description="Clear the session cookie",
)
async def logout(request: Request, response: Response) -> SessionResponse:
    """
    Clear the session cookie.

    Without revocation enabled this only removes the client's copy; a token
    copied elsewhere stays valid until it expires. With revocation enabled
    a token that still verifies is also deny-listed; forged, expired or
    malformed cookies are just cleared. Logout succeeds even when the
    deny-list is unreachable.

    Returns:
        {"success": true}
    """
    token = request.cookies.get(settings.COOKIE_NAME)

    if token and settings.TOKEN_REVOCATION_ENABLED:
        try:
            claims = verify_token(token)
        except AuthenticationError as e:
            logger.info(f"Logout with unusable session token: {e.message}")
        else:
            try:
                await blacklist_token(token, remaining_lifetime(claims))
            except RedisError:
                logger.exception("Failed to revoke token on logout")

    _set_session_cookie(response, "", 0)
    return SessionResponse()
