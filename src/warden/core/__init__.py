"""Core services and cross-cutting concerns."""

from warden.core.errors import (
    AppException,
    ConflictError,
    Denial,
    DenialKind,
    ForbiddenError,
    NotFoundError,
    StoreUnavailableError,
    UnauthorizedError,
    register_exception_handlers,
)


__all__ = [
    # Errors
    "AppException",
    "ConflictError",
    "Denial",
    "DenialKind",
    "ForbiddenError",
    "NotFoundError",
    "StoreUnavailableError",
    "UnauthorizedError",
    "register_exception_handlers",
]
