"""Role and permission repositories for database operations."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warden.core.errors import ConflictError, NotFoundError
from warden.core.permissions.models import Permission, Role, RolePermission, UserRole
from warden.modules.users.models import User


class RoleRepository:
    """Repository for Role database operations and permission grants."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, name: str, level: int = 0, description: str | None = None) -> Role:
        """Create a new role.

        Raises:
            ConflictError: If a role with this name already exists
        """
        role = Role(name=name, level=level, description=description)
        self.session.add(role)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Role name already exists",
                details={"name": name},
            ) from exc
        await self.session.refresh(role)
        return role

    async def get_by_id(self, role_id: UUID) -> Role | None:
        """Get a role by ID."""
        return await self.session.get(Role, role_id)

    async def get_by_name(self, name: str) -> Role | None:
        """Get a role by exact name."""
        result = await self.session.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Role]:
        """List roles, most privileged first."""
        result = await self.session.execute(
            select(Role).order_by(Role.level.desc(), Role.name)
        )
        return list(result.scalars().all())

    async def update(
        self,
        role_id: UUID,
        *,
        name: str | None = None,
        description: str | None = None,
        level: int | None = None,
    ) -> Role:
        """Change a role's name, description or level. None leaves a field as is.

        A level change is seen by the next permission_level call.

        Raises:
            NotFoundError: If the role does not exist
            ConflictError: If another role already has the new name
        """
        role = await self.get_by_id(role_id)
        if role is None:
            raise NotFoundError("Role not found", resource="role", resource_id=str(role_id))

        if name is not None:
            role.name = name
        if description is not None:
            role.description = description
        if level is not None:
            role.level = level

        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Role name already exists",
                details={"name": name},
            ) from exc
        await self.session.refresh(role)
        return role

    async def delete(self, role_id: UUID) -> bool:
        """Delete a role. The store cascades its user and permission links.

        Returns:
            True if a role was deleted
        """
        result = await self.session.execute(delete(Role).where(Role.id == role_id))
        await self.session.flush()
        return result.rowcount > 0

    async def list_permissions(self, role_id: UUID) -> list[Permission]:
        """List the permissions granted to a role."""
        result = await self.session.execute(
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == role_id)
            .order_by(Permission.resource, Permission.action)
        )
        return list(result.scalars().all())

    async def list_users(self, role_id: UUID) -> list[User]:
        """List the users holding a role."""
        result = await self.session.execute(
            select(User)
            .join(UserRole, UserRole.user_id == User.id)
            .where(UserRole.role_id == role_id)
            .order_by(User.username)
        )
        return list(result.scalars().all())

    async def grant_permission(self, role_id: UUID, permission_id: UUID) -> bool:
        """Grant a permission to a role. Granting twice is a no-op.

        Returns:
            True if a new grant was recorded
        """
        existing = await self.session.get(RolePermission, (role_id, permission_id))
        if existing is not None:
            return False
        self.session.add(RolePermission(role_id=role_id, permission_id=permission_id))
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise NotFoundError(
                "Role or permission not found",
                details={"role_id": str(role_id), "permission_id": str(permission_id)},
            ) from exc
        return True

    async def revoke_permission(self, role_id: UUID, permission_id: UUID) -> bool:
        """Withdraw a permission from a role.

        Returns:
            True if a grant was removed
        """
        result = await self.session.execute(
            delete(RolePermission).where(
                RolePermission.role_id == role_id,
                RolePermission.permission_id == permission_id,
            )
        )
        await self.session.flush()
        return result.rowcount > 0


class PermissionRepository:
    """Repository for Permission database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        name: str,
        resource: str,
        action: str,
        description: str | None = None,
    ) -> Permission:
        """Create a new permission.

        Raises:
            ConflictError: If a permission with this name already exists
        """
        permission = Permission(
            name=name,
            resource=resource,
            action=action,
            description=description,
        )
        self.session.add(permission)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Permission name already exists",
                details={"name": name},
            ) from exc
        await self.session.refresh(permission)
        return permission

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        """Get a permission by ID."""
        return await self.session.get(Permission, permission_id)

    async def get_by_name(self, name: str) -> Permission | None:
        """Get a permission by exact name."""
        result = await self.session.execute(
            select(Permission).where(Permission.name == name)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Permission]:
        """List every permission, grouped by resource."""
        result = await self.session.execute(
            select(Permission).order_by(Permission.resource, Permission.action)
        )
        return list(result.scalars().all())

    async def list_by_resource(self, resource: str) -> list[Permission]:
        """List the permissions defined on a resource."""
        result = await self.session.execute(
            select(Permission)
            .where(Permission.resource == resource)
            .order_by(Permission.action)
        )
        return list(result.scalars().all())

    async def update(
        self,
        permission_id: UUID,
        *,
        name: str | None = None,
        resource: str | None = None,
        action: str | None = None,
        description: str | None = None,
    ) -> Permission:
        """Change a permission. None leaves a field as is.

        Every role holding the permission now grants the new (resource, action)
        pair and no longer grants the old one.

        Raises:
            NotFoundError: If the permission does not exist
            ConflictError: If another permission already has the new name
        """
        permission = await self.get_by_id(permission_id)
        if permission is None:
            raise NotFoundError(
                "Permission not found",
                resource="permission",
                resource_id=str(permission_id),
            )

        if name is not None:
            permission.name = name
        if resource is not None:
            permission.resource = resource
        if action is not None:
            permission.action = action
        if description is not None:
            permission.description = description

        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Permission name already exists",
                details={"name": name},
            ) from exc
        await self.session.refresh(permission)
        return permission

    async def list_roles(self, permission_id: UUID) -> list[Role]:
        """List the roles that grant a permission."""
        result = await self.session.execute(
            select(Role)
            .join(RolePermission, RolePermission.role_id == Role.id)
            .where(RolePermission.permission_id == permission_id)
            .order_by(Role.level.desc(), Role.name)
        )
        return list(result.scalars().all())

    async def delete(self, permission_id: UUID) -> bool:
        """Delete a permission. The store cascades its role links.

        Returns:
            True if a permission was deleted
        """
        result = await self.session.execute(
            delete(Permission).where(Permission.id == permission_id)
        )
        await self.session.flush()
        return result.rowcount > 0
