"""Typed failure results returned by the authorization core.

Expected failures (bad credentials, bad or expired tokens, missing grants,
store outages) are values, not exceptions. Callers branch with
``isinstance(result, Denial)`` and, at the HTTP boundary, raise
``result.to_exception()``.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from warden.core.errors.exceptions import (
    AppException,
    ForbiddenError,
    StoreUnavailableError,
    UnauthorizedError,
)


class DenialKind(StrEnum):
    """Why a request was refused."""

    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    STORE_UNAVAILABLE = "store_unavailable"


@dataclass(frozen=True, slots=True)
class Denial:
    """A refused authentication or authorization attempt.

    Attributes:
        kind: The failure category surfaced to callers
        reason: Human-readable explanation, safe to log
        detail: Finer-grained internal reason (e.g. a token failure), never
            shown to end users
    """

    kind: DenialKind
    reason: str
    detail: str | None = field(default=None, compare=False)

    @classmethod
    def invalid_credentials(cls) -> "Denial":
        return cls(DenialKind.INVALID_CREDENTIALS, "Invalid credentials")

    @classmethod
    def unauthenticated(cls, detail: str | None = None) -> "Denial":
        return cls(DenialKind.UNAUTHENTICATED, "Invalid or expired token", detail)

    @classmethod
    def forbidden(cls, reason: str) -> "Denial":
        return cls(DenialKind.FORBIDDEN, reason)

    @classmethod
    def store_unavailable(cls, detail: str | None = None) -> "Denial":
        return cls(DenialKind.STORE_UNAVAILABLE, "Identity store unavailable", detail)

    def to_exception(self) -> AppException:
        """Convert this denial into the matching HTTP-aware exception."""
        if self.kind is DenialKind.FORBIDDEN:
            return ForbiddenError(self.reason, error_code="permission_denied")
        if self.kind is DenialKind.STORE_UNAVAILABLE:
            return StoreUnavailableError()
        return UnauthorizedError(self.reason, error_code=self.kind.value)
