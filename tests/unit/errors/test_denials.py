"""Unit tests for Denial values and their HTTP mapping."""

import pytest

from warden.core.errors import (
    Denial,
    DenialKind,
    ForbiddenError,
    StoreUnavailableError,
    UnauthorizedError,
)


pytestmark = pytest.mark.unit


def test_detail_does_not_affect_equality():
    assert Denial.unauthenticated("expired") == Denial.unauthenticated("malformed")


def test_kinds_are_distinct():
    kinds = {
        Denial.invalid_credentials().kind,
        Denial.unauthenticated().kind,
        Denial.forbidden("nope").kind,
        Denial.store_unavailable().kind,
    }

    assert kinds == set(DenialKind)


@pytest.mark.parametrize(
    ("denial", "exception_type", "status_code", "error_code"),
    [
        (Denial.invalid_credentials(), UnauthorizedError, 401, "invalid_credentials"),
        (Denial.unauthenticated("expired"), UnauthorizedError, 401, "unauthenticated"),
        (Denial.forbidden("Access denied"), ForbiddenError, 403, "permission_denied"),
        (Denial.store_unavailable("authorize"), StoreUnavailableError, 503, "store_unavailable"),
    ],
)
def test_to_exception(denial, exception_type, status_code, error_code):
    exc = denial.to_exception()

    assert isinstance(exc, exception_type)
    assert exc.status_code == status_code
    assert exc.error_code == error_code


def test_forbidden_exception_keeps_reason():
    exc = Denial.forbidden("Access denied. Required role: Owner").to_exception()

    assert exc.message == "Access denied. Required role: Owner"


def test_unauthenticated_exception_hides_detail():
    exc = Denial.unauthenticated("invalid_signature").to_exception()

    assert "signature" not in exc.message
