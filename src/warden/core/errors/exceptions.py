"""Domain exceptions for the application.

These exceptions represent errors that cross the HTTP boundary and are
automatically converted to RFC 7807 Problem Details responses by the
exception handlers. The authorization core itself reports expected
failures as ``Denial`` values (see ``warden.core.errors.denials``).
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested record is not found.

    Example:
        raise NotFoundError("Role not found", resource="role", resource_id=str(role_id))
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ConflictError(AppException):
    """Raised when a write collides with existing data.

    Example:
        raise ConflictError("Role name already exists", details={"name": name})
    """

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class UnauthorizedError(AppException):
    """Raised when authentication is required but not provided or invalid.

    Example:
        raise UnauthorizedError("Invalid or expired token")
    """

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class ForbiddenError(AppException):
    """Raised when a user lacks permission to access a resource.

    Example:
        raise ForbiddenError(
            "Access denied. Required permission: users:delete",
            details={"required_permission": "users:delete"}
        )
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class ServiceUnavailableError(AppException):
    """Raised when a required service is unavailable.

    Example:
        raise ServiceUnavailableError("Database connection failed")
    """

    message = "Service temporarily unavailable"
    error_code = "service_unavailable"
    status_code = 503


class StoreUnavailableError(ServiceUnavailableError):
    """Raised by the identity store when a lookup could not complete.

    Never interpreted as "no permission": the access gate turns it into a
    distinct ``store_unavailable`` denial so outages can be alerted on
    separately from ordinary refusals.
    """

    message = "Identity store unavailable"
    error_code = "store_unavailable"
