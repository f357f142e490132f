"""Permission checking logic.

This module answers authorization questions about a user from the
user -> role -> permission graph held by the identity store. Every call
reads the store afresh; nothing is cached between calls. Store failures
propagate as ``StoreUnavailableError`` and are never read as "no".
"""

from collections.abc import Iterable
from uuid import UUID

from warden.core.constants import ADMIN_ROLE_NAMES
from warden.core.identity import IdentityStore, PermissionRecord, RoleRecord


def role_name_list(role_names: Iterable[str]) -> list[str]:
    """Collect role names, refusing a bare string.

    Raises:
        TypeError: If a single string is passed instead of a collection of names
    """
    if isinstance(role_names, str):
        raise TypeError(
            f"Expected a collection of role names, got the string {role_names!r}"
        )
    return list(role_names)


class AuthorizationResolver:
    """Service for checking user permissions and roles.

    Permissions are granted only through roles. Role levels never imply
    permissions; they are used by ``permission_level`` alone.
    """

    def __init__(self, store: IdentityStore) -> None:
        self.store = store

    async def roles(self, user_id: UUID) -> list[RoleRecord]:
        """Get all roles assigned to a user."""
        return list(await self.store.roles_of_user(user_id))

    async def role_names(self, user_id: UUID) -> set[str]:
        """Get the names of all roles assigned to a user."""
        return {role.name for role in await self.store.roles_of_user(user_id)}

    async def permissions(self, user_id: UUID) -> list[PermissionRecord]:
        """Get every distinct permission granted through the user's roles."""
        return list(await self.store.permissions_of_user(user_id))

    async def has_permission(self, user_id: UUID, resource: str, action: str) -> bool:
        """Check if a user has a specific permission.

        True iff some role assigned to the user grants a permission with
        exactly this (resource, action) pair. A role deleted between the
        two reads grants nothing.

        Args:
            user_id: The user's UUID
            resource: The resource to check (e.g., "articles")
            action: The action to check (e.g., "update")

        Returns:
            True if the user has the permission, False otherwise
        """
        for role in await self.store.roles_of_user(user_id):
            if await self.store.role_has_permission(role.id, resource, action):
                return True
        return False

    async def has_role(self, user_id: UUID, role_name: str) -> bool:
        """Check if a user holds a role with exactly this name."""
        return role_name in await self.role_names(user_id)

    async def has_any_role(self, user_id: UUID, role_names: Iterable[str]) -> bool:
        """Check if a user holds at least one of the named roles.

        An empty list of names never matches.
        """
        wanted = set(role_name_list(role_names))
        if not wanted:
            return False
        return not wanted.isdisjoint(await self.role_names(user_id))

    async def has_all_roles(self, user_id: UUID, role_names: Iterable[str]) -> bool:
        """Check if a user holds every one of the named roles.

        Order and duplicates are irrelevant; an empty list is always satisfied.
        """
        wanted = set(role_name_list(role_names))
        if not wanted:
            return True
        return wanted <= await self.role_names(user_id)

    async def is_admin(self, user_id: UUID) -> bool:
        """Check if a user holds the "Super Admin" or "Admin" role.

        This is a match on role names, not on levels: a role called
        "Administrator" does not count, whatever its level.
        """
        return not (await self.role_names(user_id)).isdisjoint(ADMIN_ROLE_NAMES)

    async def can_access_resource(self, user_id: UUID, resource: str) -> bool:
        """Check if any of the user's permissions covers the resource, for any action."""
        return any(
            permission.resource == resource
            for permission in await self.store.permissions_of_user(user_id)
        )

    async def accessible_resources(self, user_id: UUID) -> set[str]:
        """Get the distinct resources the user holds at least one permission on."""
        return {
            permission.resource
            for permission in await self.store.permissions_of_user(user_id)
        }

    async def permission_level(self, user_id: UUID) -> int:
        """Get the highest level among the user's roles, or 0 with no roles."""
        roles = await self.store.roles_of_user(user_id)
        return max((role.level for role in roles), default=0)
