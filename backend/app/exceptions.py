"""
Tutorials API — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the error scenarios of the API.
Why:   Services raise these instead of building HTTP responses; global
       handlers registered in main.py map them to status codes.
How:   Each exception carries a client-facing message and an optional
       context dict that is logged but never returned.

Exception Hierarchy:
    TutorialsError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class TutorialsError(Exception):
    """
    Base exception for all Tutorials API errors.

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


class ValidationError(TutorialsError):
    """
    Raised when client input fails validation.

    When:    Malformed page/size query values, empty update body,
             request body rejected by the schema.
    HTTP:    400 Bad Request
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


class NotFoundError(TutorialsError):
    """
    Raised when a requested resource does not exist.

    When:    Lookup by id returned nothing, or update/delete touched zero rows.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        message: Optional[str] = None,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(TutorialsError):
    """
    Raised when a persistence call fails.

    HTTP:    500 Internal Server Error
    The message is chosen by the service for each operation; the
    original exception type goes into context for the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
