"""FastAPI dependencies for authentication and authorization.

This module wires the authorization core into request handling:
- Extracting the bearer token from a request
- Building the session manager, resolver and access gate per request
- Guard dependencies that route every check through the access gate
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from warden.config import Settings
from warden.core.auth.service import SessionManager
from warden.core.database import get_db
from warden.core.errors import Denial
from warden.core.identity import Identity
from warden.core.identity.sql import SqlIdentityStore
from warden.core.permissions.checker import AuthorizationResolver
from warden.core.permissions.gate import AccessGate


# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)

DBSession = Annotated[AsyncSession, Depends(get_db)]


def get_app_settings(request: Request) -> Settings:
    """The settings the running application was built with."""
    return request.app.state.settings


AppSettings = Annotated[Settings, Depends(get_app_settings)]


async def get_bearer_token(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str | None:
    """Extract the session token from the request.

    Looks at the ``Authorization: Bearer`` header first, then at a ``token``
    query parameter. The token is returned exactly as presented.
    """
    if credentials:
        return credentials.credentials
    return request.query_params.get("token") or None


BearerToken = Annotated[str | None, Depends(get_bearer_token)]


def get_identity_store(db: DBSession) -> SqlIdentityStore:
    return SqlIdentityStore(db)


IdentityStoreDep = Annotated[SqlIdentityStore, Depends(get_identity_store)]


def get_session_manager(store: IdentityStoreDep, settings: AppSettings) -> SessionManager:
    return SessionManager(
        store,
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        ttl=settings.session_ttl,
    )


def get_resolver(store: IdentityStoreDep) -> AuthorizationResolver:
    return AuthorizationResolver(store)


Sessions = Annotated[SessionManager, Depends(get_session_manager)]
Resolver = Annotated[AuthorizationResolver, Depends(get_resolver)]


def get_access_gate(sessions: Sessions, resolver: Resolver) -> AccessGate:
    return AccessGate(sessions, resolver)


Gate = Annotated[AccessGate, Depends(get_access_gate)]


def _granted(request: Request, result: Identity | Denial) -> Identity:
    if isinstance(result, Denial):
        raise result.to_exception()
    request.state.user_id = result.id
    return result


async def get_current_identity(
    request: Request, gate: Gate, token: BearerToken
) -> Identity:
    """Get the authenticated caller.

    Raises:
        UnauthorizedError: If the token is missing, invalid or expired
        StoreUnavailableError: If the identity store could not be reached
    """
    return _granted(request, await gate.authenticate(token))


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


def require_permission(
    resource: str, action: str
) -> Callable[..., Awaitable[Identity]]:
    """Dependency factory that requires a (resource, action) grant.

    Usage:
        @router.delete("/users/{user_id}")
        async def delete_user(
            user_id: UUID,
            caller: Annotated[Identity, Depends(require_permission("users", "delete"))],
        ):
            ...

    Raises:
        UnauthorizedError: If the caller is not authenticated
        ForbiddenError: If the caller lacks the grant
        StoreUnavailableError: If the identity store could not be reached
    """

    async def dependency(request: Request, gate: Gate, token: BearerToken) -> Identity:
        return _granted(request, await gate.authorize(token, resource, action))

    return dependency


def require_role(role_name: str) -> Callable[..., Awaitable[Identity]]:
    """Dependency factory that requires the named role."""

    async def dependency(request: Request, gate: Gate, token: BearerToken) -> Identity:
        return _granted(request, await gate.authorize_role(token, role_name))

    return dependency


def require_any_role(
    *role_names: str,
) -> Callable[..., Awaitable[Identity]]:
    """Dependency factory that requires at least one of the named roles."""

    async def dependency(request: Request, gate: Gate, token: BearerToken) -> Identity:
        return _granted(request, await gate.authorize_any_role(token, role_names))

    return dependency


def require_admin() -> Callable[..., Awaitable[Identity]]:
    """Dependency factory that requires an administrator role."""

    async def dependency(request: Request, gate: Gate, token: BearerToken) -> Identity:
        return _granted(request, await gate.authorize_admin(token))

    return dependency
