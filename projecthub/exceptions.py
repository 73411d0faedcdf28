"""
ProjectHub Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for each failure class of the API.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch these
       and return structured JSON error responses with the matching status.
Who:   Raised by validation utilities, the auth middleware and services.

Exception Hierarchy:
    ProjectHubError (base)
    ├── InvalidInputError   → 400 Bad Request (malformed or missing field)
    ├── UnauthorizedError   → 401 Unauthorized (no usable credentials)
    ├── ForbiddenError      → 403 Forbidden (bad token, not the owner)
    ├── NotFoundError       → 404 Not Found
    ├── ConflictError       → 409 Conflict (duplicate username/email)
    └── DatabaseError       → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class ProjectHubError(Exception):
    """
    Base exception for all ProjectHub application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, and returned only where the
                  handler chooses to expose it as `details`)
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidInputError(ProjectHubError):
    """
    Raised when a request field is missing, of the wrong type, out of bounds
    or badly formatted.

    Example response:
        {
            "error": "invalid_input",
            "message": "Invalid project name: must be 3 to 50 characters long",
            "details": {"field": "project name", "reason": "must be 3 to 50 characters long"}
        }
    """

    status_code = 400
    error_code = "invalid_input"

    def __init__(
        self,
        label: str = "input",
        reason: str = "is invalid",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["field"] = label
        ctx["reason"] = reason
        super().__init__(message=f"Invalid {label}: {reason}", context=ctx)
        self.label = label
        self.reason = reason


class UnauthorizedError(ProjectHubError):
    """Raised when a request carries no usable credentials."""

    status_code = 401
    error_code = "unauthorized"

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(ProjectHubError):
    """
    Raised when credentials were presented but do not grant the action:
    the token failed verification, or the caller does not own the resource.
    """

    status_code = 403
    error_code = "forbidden"

    def __init__(
        self,
        message: str = "You are not allowed to perform this action",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ProjectHubError):
    """
    Raised when a referenced entity does not exist.

    MongoDB returns None for missing documents (not an exception); services
    convert that None into this error.
    """

    status_code = 404
    error_code = "not_found"

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


class ConflictError(ProjectHubError):
    """Raised when a write would violate a uniqueness rule."""

    status_code = 409
    error_code = "conflict"

    def __init__(
        self,
        message: str = "The resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(ProjectHubError):
    """
    Raised when a database operation fails unexpectedly.

    The message returned to the client is always generic; the driver error is
    logged server-side only.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
