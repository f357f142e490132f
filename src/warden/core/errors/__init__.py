"""Error handling module: core denials and RFC 7807 Problem Details."""

from warden.core.errors.denials import Denial, DenialKind
from warden.core.errors.exceptions import (
    AppException,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceUnavailableError,
    StoreUnavailableError,
    UnauthorizedError,
)
from warden.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "ConflictError",
    # Denials
    "Denial",
    "DenialKind",
    # Handlers
    "FieldError",
    "ForbiddenError",
    "NotFoundError",
    "ProblemDetail",
    "ServiceUnavailableError",
    "StoreUnavailableError",
    "UnauthorizedError",
    "register_exception_handlers",
]
