"""The narrow read interface the authorization core consumes.

Any backend (SQL, LDAP, an in-memory fixture) can serve the core as long as
it satisfies ``IdentityStore``. Implementations raise
``StoreUnavailableError`` when a lookup cannot complete; they never answer
"not found" for an outage.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable
from uuid import UUID

from warden.core.identity.schemas import PermissionRecord, RoleRecord, UserRecord


@runtime_checkable
class IdentityStore(Protocol):
    """Read access to users and the user -> role -> permission graph."""

    async def find_user_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with this id, or None if it does not exist."""
        ...

    async def find_user_by_login(self, username: str) -> UserRecord | None:
        """Return the user with this exact (case-sensitive) login name."""
        ...

    async def roles_of_user(self, user_id: UUID) -> Sequence[RoleRecord]:
        """Return the roles currently assigned to the user."""
        ...

    async def permissions_of_user(self, user_id: UUID) -> Sequence[PermissionRecord]:
        """Return the distinct permissions granted through all the user's roles."""
        ...

    async def role_has_permission(self, role_id: UUID, resource: str, action: str) -> bool:
        """Whether the role grants a permission with this (resource, action) pair.

        A role that no longer exists grants nothing.
        """
        ...
