"""The access gate: authenticate, then authorize.

Every protected operation goes through ``AccessGate`` so authentication can
never be skipped. It is the only place where the session manager and the
authorization resolver are combined.
"""

from collections.abc import Awaitable, Callable, Iterable
from uuid import UUID

import structlog

from warden.core.auth.service import SessionManager
from warden.core.errors import Denial, StoreUnavailableError
from warden.core.identity import Identity
from warden.core.permissions.checker import AuthorizationResolver, role_name_list


logger = structlog.get_logger()


class AccessGate:
    """Single entry point used by request handlers before protected work."""

    def __init__(self, sessions: SessionManager, resolver: AuthorizationResolver) -> None:
        self.sessions = sessions
        self.resolver = resolver

    async def authenticate(self, token: str | None) -> Identity | Denial:
        """Resolve the caller's identity without any authorization check."""
        if not token:
            logger.info("token_rejected", reason="missing")
            return Denial.unauthenticated("missing")
        return await self.sessions.validate(token)

    async def _enforce(
        self,
        token: str | None,
        predicate: Callable[[UUID], Awaitable[bool]],
        reason: str,
        requirement: str,
    ) -> Identity | Denial:
        identity = await self.authenticate(token)
        if isinstance(identity, Denial):
            return identity

        try:
            allowed = await predicate(identity.id)
        except StoreUnavailableError:
            # Fail closed, but keep outages distinguishable from refusals
            logger.error(
                "store_unavailable",
                operation="authorize",
                user_id=str(identity.id),
                requirement=requirement,
            )
            return Denial.store_unavailable("authorize")

        if not allowed:
            logger.warning(
                "access_denied",
                user_id=str(identity.id),
                requirement=requirement,
            )
            return Denial.forbidden(reason)

        return identity

    async def authorize(
        self, token: str | None, resource: str, action: str
    ) -> Identity | Denial:
        """Authenticate the token and require the (resource, action) grant.

        Args:
            token: Bearer token from the request, unmodified
            resource: The protected resource (e.g., "users")
            action: The action being performed (e.g., "delete")

        Returns:
            The caller's Identity, or an unauthenticated, forbidden or
            store_unavailable denial
        """
        return await self._enforce(
            token,
            lambda user_id: self.resolver.has_permission(user_id, resource, action),
            f"Access denied. Required permission: {resource}:{action}",
            f"{resource}:{action}",
        )

    async def authorize_role(self, token: str | None, role_name: str) -> Identity | Denial:
        """Authenticate the token and require the named role."""
        return await self._enforce(
            token,
            lambda user_id: self.resolver.has_role(user_id, role_name),
            f"Access denied. Required role: {role_name}",
            f"role:{role_name}",
        )

    async def authorize_any_role(
        self, token: str | None, role_names: Iterable[str]
    ) -> Identity | Denial:
        """Authenticate the token and require at least one of the named roles."""
        names = role_name_list(role_names)
        return await self._enforce(
            token,
            lambda user_id: self.resolver.has_any_role(user_id, names),
            f"Access denied. Required any of roles: {', '.join(names)}",
            f"any_role:{','.join(names)}",
        )

    async def authorize_admin(self, token: str | None) -> Identity | Denial:
        """Authenticate the token and require an administrator role."""
        return await self._enforce(
            token,
            self.resolver.is_admin,
            "Access denied. Admin privileges required",
            "admin",
        )
