"""Authentication schemas for session token handling."""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field

from warden.core.identity.schemas import Identity, PermissionRecord, RoleRecord, UserStatus


class TokenFailure(StrEnum):
    """Why a presented session token was rejected."""

    MALFORMED = "malformed"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"


class SessionClaims(BaseModel):
    """Data extracted from a session token.

    Attributes:
        user_id: The subject's UUID
        username: Login name at issue time
        email: Contact address at issue time
        status: Account status at issue time
        issued_at: When the token was minted
        expires_at: When the token stops being accepted
        jti: Random token id
    """

    user_id: UUID
    username: str
    email: str
    status: UserStatus
    issued_at: datetime
    expires_at: datetime
    jti: str | None = None

    @property
    def identity(self) -> Identity:
        """The identity snapshot embedded in the token."""
        return Identity(
            id=self.user_id,
            username=self.username,
            email=self.email,
            status=self.status,
        )


class TokenResult(BaseModel):
    """Outcome of decoding a session token: either claims or a failure."""

    claims: SessionClaims | None = None
    failure: TokenFailure | None = None

    @property
    def ok(self) -> bool:
        return self.claims is not None


# ============================================================
# HTTP payloads
# ============================================================


class LoginRequest(BaseModel):
    """Credentials posted to the login endpoint."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """A freshly issued session token.

    Attributes:
        access_token: Opaque bearer token
        token_type: Always "bearer"
        expires_in: Token lifetime in seconds
    """

    access_token: str
    token_type: str = "bearer"
    expires_in: int


class AccessSummary(BaseModel):
    """Everything the caller's roles currently allow."""

    user: Identity
    roles: list[RoleRecord]
    permissions: list[PermissionRecord]
    is_admin: bool
    permission_level: int
    accessible_resources: list[str]


class PermissionCheckRequest(BaseModel):
    """A (resource, action) pair to test against the caller's grants."""

    resource: str = Field(..., min_length=1)
    action: str = Field(..., min_length=1)


class PermissionCheckResponse(BaseModel):
    """Answer to a permission check."""

    resource: str
    action: str
    allowed: bool
