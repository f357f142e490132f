"""RFC 7807 problem responses for application errors.

Authentication failures carry ``WWW-Authenticate: Bearer``. Identity store
outages are tagged ``retryable`` and logged under their own event so they can
be alerted on apart from ordinary refusals.

See: https://tools.ietf.org/html/rfc7807
"""

from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from warden.core.errors.exceptions import AppException, StoreUnavailableError


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


class FieldError(BaseModel):
    """One invalid request field."""

    field: str
    message: str
    type: str | None = None


class ProblemDetail(BaseModel):
    """Problem details body.

    Attributes:
        type: Error type URI under the API docs base URL
        title: Error code in title case
        status: HTTP status code
        detail: Message for this occurrence
        instance: Request path
        errors: Field errors, for validation failures only
        trace_id: The request ID
        retryable: Set when the failure is an outage rather than a refusal
    """

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[FieldError] | None = None
    trace_id: str | None = None
    retryable: bool | None = None

    model_config = {"extra": "allow"}


def _problem(
    request: Request,
    error_code: str,
    title: str,
    status_code: int,
    detail: str,
    **extra: Any,
) -> dict[str, Any]:
    base_url = request.app.state.settings.api_docs_base_url
    return ProblemDetail(
        type=f"{base_url}/errors/{error_code}",
        title=title,
        status=status_code,
        detail=detail,
        instance=str(request.url.path),
        trace_id=getattr(request.state, "request_id", None),
        **extra,
    ).model_dump(exclude_none=True)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an AppException, merging its details into the body."""
    store_outage = isinstance(exc, StoreUnavailableError)
    if store_outage:
        logger.error(
            "store_unavailable_response",
            path=str(request.url.path),
            details=exc.details,
        )
    else:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "app_exception",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=str(request.url.path),
            details=exc.details,
        )

    content = _problem(
        request,
        exc.error_code,
        exc.error_code.replace("_", " ").title(),
        exc.status_code,
        exc.message,
        retryable=True if store_outage else None,
    )
    for key, value in exc.details.items():
        content.setdefault(key, value)

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation errors with one entry per field."""
    errors = [
        FieldError(
            field=".".join(str(part) for part in error.get("loc", ()) if part != "body")
            or "unknown",
            message=error.get("msg", "Invalid value"),
            type=error.get("type"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "validation_error",
        path=str(request.url.path),
        error_count=len(errors),
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_problem(
            request,
            "validation_error",
            "Validation Error",
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "Request validation failed",
            errors=errors,
        ),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected exception and answer with a bare 500."""
    logger.exception(
        "unhandled_exception",
        path=str(request.url.path),
        error_type=type(exc).__name__,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_problem(
            request,
            "internal_error",
            "Internal Server Error",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the problem-detail handlers on an app."""
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast("ExceptionHandler", validation_exception_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
