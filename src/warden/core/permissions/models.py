"""Permission system database models.

This module defines the RBAC (Role-Based Access Control) models:
- Role: A named, levelled set of permission grants
- Permission: An action that can be performed on a resource
- UserRole: Join rows linking users to roles
- RolePermission: Join rows linking roles to permissions

Both join tables cascade on delete, so removing a role, permission or user
detaches its assignments in the store itself.
"""

from uuid import UUID

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from warden.core.constants import (
    MAX_DESCRIPTION_LENGTH,
    MAX_PERMISSION_ACTION_LENGTH,
    MAX_PERMISSION_NAME_LENGTH,
    MAX_PERMISSION_RESOURCE_LENGTH,
    MAX_ROLE_NAME_LENGTH,
)
from warden.core.database.base import AssignedAtMixin, Base, TimestampMixin, UUIDMixin


class Permission(Base, UUIDMixin, TimestampMixin):
    """Permission model representing an action on a resource.

    Attributes:
        name: Unique display name (e.g. "Edit Articles")
        resource: The protected domain (e.g. "users", "articles")
        action: The operation (e.g. "read", "create", "update", "delete")
        description: Human-readable description of the permission

    The (resource, action) pair is what enforcement points check. It is not
    unique: two differently named permissions may grant the same pair.
    """

    __tablename__ = "permissions"
    __table_args__ = (Index("ix_permissions_resource_action", "resource", "action"),)

    name: Mapped[str] = mapped_column(
        String(MAX_PERMISSION_NAME_LENGTH),
        nullable=False,
        unique=True,
    )
    resource: Mapped[str] = mapped_column(
        String(MAX_PERMISSION_RESOURCE_LENGTH),
        nullable=False,
    )
    action: Mapped[str] = mapped_column(
        String(MAX_PERMISSION_ACTION_LENGTH),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Permission({self.name}: {self.resource}:{self.action})>"


class Role(Base, UUIDMixin, TimestampMixin):
    """Role model representing a named set of permission grants.

    Attributes:
        name: Unique role name (e.g. "Admin", "Editor", "Viewer")
        description: Human-readable description of the role
        level: Privilege rank, higher is more privileged. Only used for
            explicit comparisons; it never implies permissions.
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(MAX_ROLE_NAME_LENGTH),
        nullable=False,
        unique=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(MAX_DESCRIPTION_LENGTH),
        nullable=True,
    )
    level: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name}, level={self.level})>"


class UserRole(Base, AssignedAtMixin):
    """Join row assigning a role to a user. A pair appears at most once."""

    __tablename__ = "user_roles"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    role_id: Mapped[UUID] = mapped_column(
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<UserRole(user_id={self.user_id}, role_id={self.role_id})>"


class RolePermission(Base, AssignedAtMixin):
    """Join row granting a permission to a role. A pair appears at most once."""

    __tablename__ = "role_permissions"

    role_id: Mapped[UUID] = mapped_column(
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    permission_id: Mapped[UUID] = mapped_column(
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<RolePermission(role_id={self.role_id}, "
            f"permission_id={self.permission_id})>"
        )
