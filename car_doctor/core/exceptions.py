"""
Custom exception hierarchy for structured error handling.

WHY: Every route handler reports failures by raising one of these
exceptions; the handlers in exception_handlers.py turn them into the JSON
error envelope. Route code never builds error responses by hand.

Three kinds of failure exist:
1. Client errors (missing/invalid session, ownership mismatch) -> 401/403
2. Not found (valid request, absent resource) -> 404
3. Server errors (driver or signing failures, unparseable ids) -> 500
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        **context: Any,
    ):
        """
        Initialize exception with message and context.

        Args:
            message: Human-readable error message
            status_code: HTTP status code (overrides class default)
            **context: Additional context for debugging (filtered in to_dict)
        """
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.context = context
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize exception to dictionary for JSON response.

        Server errors never expose their context (collection names, driver
        or signing messages); it is only logged.

        Returns:
            Dictionary with error details (sensitive fields filtered out)
        """
        if self.status_code >= 500:
            filtered_context = {}
        else:
            sensitive_fields = {"password", "token", "secret", "key", "api_key"}
            filtered_context = {
                k: v for k, v in self.context.items() if k.lower() not in sensitive_fields
            }

        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "details": filtered_context if filtered_context else None,
        }


# ============================================================================
# Authentication & Authorization Exceptions
# ============================================================================


class AuthenticationError(AppException):
    """
    Raised when the session cookie is missing or cannot be verified.

    HTTP Status: 401 Unauthorized
    """

    status_code = 401
    default_message = "Unauthorized access"


class AuthorizationError(AppException):
    """
    Raised when the session identity does not own the requested resource.

    HTTP Status: 403 Forbidden
    """

    status_code = 403
    default_message = "Forbidden access"


class TokenExpiredError(AuthenticationError):
    """
    Raised when the JWT has passed its expiry.

    HTTP Status: 401 Unauthorized
    """

    default_message = "Token has expired"


class TokenInvalidError(AuthenticationError):
    """
    Raised when the JWT is malformed or has an invalid signature.

    HTTP Status: 401 Unauthorized
    """

    default_message = "Token is invalid"


class TokenRevokedError(AuthenticationError):
    """
    Raised when the JWT is on the logout deny-list.

    HTTP Status: 401 Unauthorized
    """

    default_message = "Token has been revoked"


class TokenSigningError(AppException):
    """
    Raised when a session token cannot be issued.

    HTTP Status: 500 Internal Server Error
    """

    status_code = 500
    default_message = "Internal server error"


# ============================================================================
# Resource Exceptions
# ============================================================================


class ResourceNotFoundError(AppException):
    """
    Raised when a requested resource doesn't exist.

    HTTP Status: 404 Not Found
    """

    status_code = 404
    default_message = "Resource not found"


class MalformedIdentifierError(AppException):
    """
    Raised when a path identifier is not a valid 24-hex ObjectId.

    The lookup fails before reaching the database and is reported with the
    same generic body as any other server-side failure.

    HTTP Status: 500 Internal Server Error
    """

    status_code = 500
    default_message = "Internal server error"


# ============================================================================
# Database Exceptions
# ============================================================================


class DatabaseError(AppException):
    """
    Raised when a MongoDB operation fails.

    Driver errors are caught at the DAO layer and converted to this
    exception with a generic message; the driver detail only reaches the log.

    HTTP Status: 500 Internal Server Error
    """

    status_code = 500
    default_message = "Internal server error"
