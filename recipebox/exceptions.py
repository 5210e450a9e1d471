"""
RecipeBox Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for the account and recipe layer.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    RecipeBoxError (base)
    ├── NotFoundError            → 404 Not Found
    ├── DuplicateEmailError      → 400 Bad Request
    ├── InvalidCredentialsError  → 401 Unauthorized
    └── StoreUnavailableError    → 503 Service Unavailable

    Anything else reaching the boundary is reported as an opaque 500.
"""

from typing import Any, Dict, Optional


class RecipeBoxError(Exception):
    """
    Base exception for all RecipeBox application errors.

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


class NotFoundError(RecipeBoxError):
    """
    Raised when a referenced User or Recipe id does not exist.

    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; services convert that None
    into this exception so the status code is decided in one place.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DuplicateEmailError(RecipeBoxError):
    """
    Raised when registering (or re-pointing a profile to) an email another
    User already holds.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        email: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message="Email already registered", context=context)
        self.email = email


class InvalidCredentialsError(RecipeBoxError):
    """
    Raised when login fails.

    HTTP:    401 Unauthorized

    The message is identical for an unknown email and a wrong password.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Invalid Credentials", context=context)


class StoreUnavailableError(RecipeBoxError):
    """
    Raised when the underlying persistence layer fails in a way the services
    do not otherwise classify (connection lost, timeout, unexpected constraint).

    HTTP:    503 Service Unavailable

    The client always gets a generic message. The original error type is
    kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "The data store is temporarily unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
