"""An in-memory identity store for unit tests."""

from collections.abc import Iterable
from uuid import UUID

from warden.core.errors import StoreUnavailableError
from warden.core.identity.schemas import PermissionRecord, RoleRecord, UserRecord


class InMemoryIdentityStore:
    """Holds users, roles and permissions in dicts.

    Set ``available = False`` to make every call fail as an outage.
    """

    def __init__(self) -> None:
        self.users: dict[UUID, UserRecord] = {}
        self.roles: dict[UUID, RoleRecord] = {}
        self.permissions: dict[UUID, PermissionRecord] = {}
        self.user_roles: set[tuple[UUID, UUID]] = set()
        self.role_permissions: set[tuple[UUID, UUID]] = set()
        self.available = True

    def add_user(self, user: UserRecord) -> UserRecord:
        self.users[user.id] = user
        return user

    def add_role(self, role: RoleRecord, *permissions: PermissionRecord) -> RoleRecord:
        self.roles[role.id] = role
        for permission in permissions:
            self.permissions[permission.id] = permission
            self.role_permissions.add((role.id, permission.id))
        return role

    def assign(self, user: UserRecord, roles: Iterable[RoleRecord]) -> None:
        for role in roles:
            self.user_roles.add((user.id, role.id))

    def delete_role(self, role_id: UUID) -> None:
        self.roles.pop(role_id, None)
        self.user_roles = {pair for pair in self.user_roles if pair[1] != role_id}
        self.role_permissions = {
            pair for pair in self.role_permissions if pair[0] != role_id
        }

    def _check(self) -> None:
        if not self.available:
            raise StoreUnavailableError()

    async def find_user_by_id(self, user_id: UUID) -> UserRecord | None:
        self._check()
        return self.users.get(user_id)

    async def find_user_by_login(self, username: str) -> UserRecord | None:
        self._check()
        return next(
            (user for user in self.users.values() if user.username == username),
            None,
        )

    async def roles_of_user(self, user_id: UUID) -> list[RoleRecord]:
        self._check()
        return [
            self.roles[role_id]
            for uid, role_id in sorted(self.user_roles)
            if uid == user_id and role_id in self.roles
        ]

    async def permissions_of_user(self, user_id: UUID) -> list[PermissionRecord]:
        self._check()
        role_ids = {role.id for role in await self.roles_of_user(user_id)}
        permission_ids = {
            permission_id
            for role_id, permission_id in self.role_permissions
            if role_id in role_ids
        }
        return [self.permissions[permission_id] for permission_id in sorted(permission_ids)]

    async def role_has_permission(self, role_id: UUID, resource: str, action: str) -> bool:
        self._check()
        return any(
            self.permissions[permission_id].resource == resource
            and self.permissions[permission_id].action == action
            for rid, permission_id in self.role_permissions
            if rid == role_id
        )
