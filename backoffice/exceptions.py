"""
Tienda Back Office — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions, one per HTTP failure class.
Why:   Controllers and services raise these instead of building error
       responses by hand; global handlers (registered in main.py) turn them
       into JSON bodies with the right status code.
How:   Each exception carries a client-safe message and an optional context
       dict that is logged but never returned.

Exception Hierarchy:
    BackOfficeError (base)
    ├── ValidationError          → 400 Bad Request
    ├── AuthenticationError      → 401 Unauthorized
    ├── NotFoundError            → 404 Not Found
    ├── UnknownResourceError     → 404 Not Found (echoes the resource token)
    ├── MethodNotAllowedError    → 405 Method Not Allowed
    ├── ConflictError            → 409 Conflict
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional, Sequence


class BackOfficeError(Exception):
    """
    Base exception for all back office errors.

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


class ValidationError(BackOfficeError):
    """
    Raised when client input fails validation.

    What:    Malformed, missing or out-of-range input.
    When:    Always before any database call.
    HTTP:    400 Bad Request

    `errors` lists every offending field, not only the first one:
        [{"field": "price", "message": "Input should be greater than 0"}, ...]
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors = errors or []


class AuthenticationError(BackOfficeError):
    """
    Raised when login credentials are rejected.

    HTTP:    401 Unauthorized

    The message is deliberately the same for an unknown email and a wrong
    password so the response cannot be used to discover accounts.
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(BackOfficeError):
    """
    Raised when a requested record or route does not exist.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class UnknownResourceError(BackOfficeError):
    """
    Raised by the dispatcher when the first path segment names no resource.

    HTTP:    404 Not Found
    The offending token is echoed back in the response body for diagnostics.
    """

    def __init__(self, resource: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Resource not found", context=context)
        self.resource = resource


class MethodNotAllowedError(BackOfficeError):
    """
    Raised when a known resource does not accept the verb/identifier combination.

    HTTP:    405 Method Not Allowed
    `allowed` feeds the Allow response header.
    """

    def __init__(
        self,
        allowed: Sequence[str] = (),
        message: str = "Method not allowed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.allowed = list(allowed)


class ConflictError(BackOfficeError):
    """
    Raised when a write would violate a uniqueness rule (duplicate email).

    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "The resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(BackOfficeError):
    """
    Raised when database operations fail unexpectedly.

    What:    Connection refused, lost mid-query, constraint the app did not expect.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The original
        exception type and message go to `context`, which is only logged.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
