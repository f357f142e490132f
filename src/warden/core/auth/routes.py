"""Authentication API routes.

Provides endpoints for:
- Login/logout
- Token refresh
- The caller's effective access
- Ad-hoc permission checks
"""

from fastapi import APIRouter, status

from warden.core.auth.dependencies import (
    BearerToken,
    CurrentIdentity,
    Resolver,
    Sessions,
)
from warden.core.auth.schemas import (
    AccessSummary,
    LoginRequest,
    PermissionCheckRequest,
    PermissionCheckResponse,
    TokenResponse,
)
from warden.core.errors import Denial, UnauthorizedError


router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(result: str | Denial, sessions: Sessions) -> TokenResponse:
    if isinstance(result, Denial):
        raise result.to_exception()
    return TokenResponse(access_token=result, expires_in=sessions.expires_in)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with username and password",
    description="Authenticate with a login name and password to receive a session token.",
)
async def login(data: LoginRequest, sessions: Sessions) -> TokenResponse:
    """Login with username and password."""
    result = await sessions.authenticate(data.username, data.password)
    return _token_response(result, sessions)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh session token",
    description="Exchange a still-valid token for a new one built from the current account state.",
)
async def refresh_token(token: BearerToken, sessions: Sessions) -> TokenResponse:
    """Refresh the session token."""
    if not token:
        raise UnauthorizedError("Missing authentication token", error_code="missing_token")
    result = await sessions.refresh(token)
    return _token_response(result, sessions)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout",
    description="Ends the session client-side. Issued tokens remain valid until they expire.",
)
async def logout(token: BearerToken, sessions: Sessions) -> None:
    """Logout."""
    await sessions.logout(token)


@router.get(
    "/me",
    response_model=AccessSummary,
    summary="Get current user and access",
    description="Returns the caller's identity, roles, permissions and derived access.",
)
async def get_me(caller: CurrentIdentity, resolver: Resolver) -> AccessSummary:
    """Get the caller's identity and effective access."""
    roles = await resolver.roles(caller.id)
    permissions = await resolver.permissions(caller.id)
    return AccessSummary(
        user=caller,
        roles=roles,
        permissions=permissions,
        is_admin=await resolver.is_admin(caller.id),
        permission_level=await resolver.permission_level(caller.id),
        accessible_resources=sorted(await resolver.accessible_resources(caller.id)),
    )


@router.post(
    "/check",
    response_model=PermissionCheckResponse,
    summary="Check a permission",
    description="Reports whether the caller holds the given (resource, action) grant.",
)
async def check_permission(
    data: PermissionCheckRequest,
    caller: CurrentIdentity,
    resolver: Resolver,
) -> PermissionCheckResponse:
    """Check whether the caller holds a permission."""
    allowed = await resolver.has_permission(caller.id, data.resource, data.action)
    return PermissionCheckResponse(
        resource=data.resource,
        action=data.action,
        allowed=allowed,
    )
