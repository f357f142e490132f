"""Permission system for role-based access control (RBAC)."""

from warden.core.permissions.checker import AuthorizationResolver
from warden.core.permissions.gate import AccessGate
from warden.core.permissions.models import Permission, Role, RolePermission, UserRole
from warden.core.permissions.repos import PermissionRepository, RoleRepository


__all__ = [
    # Gate
    "AccessGate",
    # Checker
    "AuthorizationResolver",
    # Models
    "Permission",
    # Repositories
    "PermissionRepository",
    "Role",
    "RolePermission",
    "RoleRepository",
    "UserRole",
]
