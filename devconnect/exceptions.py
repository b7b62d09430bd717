"""
DevConnect Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages, without leaking internal
       details to the client.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    DevConnectError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── ConflictError            → 400 Bad Request (duplicate like / missing like)
    ├── AuthenticationError      → 401 Unauthorized (missing/invalid token, bad credentials)
    ├── AuthorizationError       → 401 Unauthorized (acting user is not the owner)
    ├── NotFoundError            → 404 Not Found
    ├── ExternalServiceError     → 503 Service Unavailable (GitHub)
    ├── DatabaseError            → 500 Internal Server Error
    └── RateLimitExceededError   → 429 Too Many Requests
"""

from typing import Any, Dict, List, Optional


class DevConnectError(Exception):
    """
    Base exception for all DevConnect application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(DevConnectError):
    """
    Raised when client input fails a business rule.

    Schema-level problems (missing fields, wrong types) are caught earlier by
    Pydantic and reported through FastAPI's RequestValidationError; this class
    covers rules that need the database, such as a duplicate email.

    Example response:
        {
            "error": "validation_error",
            "msg": "User already exists",
            "errors": [{"field": "email", "msg": "User already exists"}]
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field

    @property
    def errors(self) -> List[Dict[str, Optional[str]]]:
        return [{"field": self.field, "msg": self.message}]


class ConflictError(DevConnectError):
    """
    Raised when an operation contradicts the current state of a resource.

    When:    Liking a post twice, unliking a post that was never liked.
    HTTP:    400 Bad Request (the request is a rejected no-op, not a server fault)
    """

    def __init__(
        self,
        message: str = "The request conflicts with the current state of the resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthenticationError(DevConnectError):
    """
    Raised when the caller's identity cannot be established.

    When:    No token, a token that fails verification, or wrong credentials
             at login. Login deliberately uses one message for unknown email
             and wrong password.
    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthorizationError(DevConnectError):
    """
    Raised when an authenticated user acts on a resource they do not own.

    When:    Deleting someone else's post or comment.
    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "User not authorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(DevConnectError):
    """
    Raised when a requested resource does not exist.

    When:    Unknown post/profile/comment/experience id, and also for ids that
             are not well-formed UUIDs (those can never exist, so they share
             the not-found response instead of surfacing as a server error).
    HTTP:    404 Not Found

    The message is the exact text returned to the client, e.g.
    "Post not found" or "There is no profile for this user".
    """

    def __init__(
        self,
        message: str = "The requested resource was not found",
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class ExternalServiceError(DevConnectError):
    """
    Raised when an upstream HTTP service (GitHub) fails after all retries.

    HTTP:    503 Service Unavailable
    """

    def __init__(
        self,
        message: str = "An external service is temporarily unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(DevConnectError):
    """
    Raised when database operations fail unexpectedly.

    Security Note:
        The message returned to the client is always generic.
        Detailed error info (SQL, constraint names) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(DevConnectError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests, with a Retry-After header
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
