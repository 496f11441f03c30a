"""
HairBook Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for every user-facing failure.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right HTTP status.
Who:   Raised by services and the auth gate; caught by global handlers.

Exception Hierarchy:
    HairBookError (base)
    ├── ValidationError          → 400 (missing or malformed input)
    ├── DuplicateEmailError      → 400 (email already registered)
    ├── InvalidCredentialsError  → 400 (unknown email OR wrong password)
    ├── InvalidTokenError        → never reaches HTTP; the gate converts it
    ├── UnauthorizedError        → 401 (missing/invalid/expired bearer token)
    ├── ForbiddenError           → 403 (valid token, insufficient role)
    └── DatabaseError            → 500

Each class exposes `code`, the machine-readable error code placed in the
response body next to the human message.
"""

from typing import Any, Dict, Optional


class HairBookError(Exception):
    """
    Base exception for all HairBook application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    code = "server_error"
    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HairBookError):
    """
    Raised when client input is missing or malformed.

    HTTP:    400 Bad Request (FastAPI's own 422 body errors are folded into
             this code by the RequestValidationError handler in main.py).
    """

    code = "validation_error"
    status_code = 400

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


class DuplicateEmailError(HairBookError):
    """Raised on registration when the email already belongs to a user."""

    code = "duplicate_email"
    status_code = 400

    def __init__(
        self,
        message: str = "Email already registered",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidCredentialsError(HairBookError):
    """
    Raised on login for an unknown email and for a wrong password alike.

    Both cases share this exact message so the response never reveals
    which emails are registered.
    """

    code = "invalid_credentials"
    status_code = 400

    def __init__(
        self,
        message: str = "Invalid email or password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidTokenError(HairBookError):
    """
    Raised by the token service when a bearer token cannot be trusted.

    When:    Bad signature, malformed token, missing/ill-typed claims, expired.
    The auth gate catches this and raises UnauthorizedError instead; the
    reason stays in `context` for server-side logging.
    """

    code = "invalid_token"
    status_code = 401

    def __init__(
        self,
        message: str = "Invalid or expired token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(HairBookError):
    """Raised by the auth gate when no valid bearer token is presented."""

    code = "unauthorized"
    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(HairBookError):
    """
    Raised when the caller's identity is proven but its role is insufficient.

    Distinct from UnauthorizedError: retrying with the same token cannot help.
    """

    code = "forbidden"
    status_code = 403

    def __init__(
        self,
        message: str = "Forbidden",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(HairBookError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic. Detailed error
    info (constraint names, SQL) is logged server-side only.
    """

    code = "server_error"
    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
