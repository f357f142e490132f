"""SQLAlchemy implementation of the identity store."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar
from uuid import UUID

import structlog
from sqlalchemy import exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from warden.core.errors import StoreUnavailableError
from warden.core.identity.schemas import PermissionRecord, RoleRecord, UserRecord
from warden.core.permissions.models import Permission, Role, RolePermission, UserRole
from warden.modules.users.models import User


logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")


def store_call(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Re-raise database failures as StoreUnavailableError."""

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.error(
                "store_query_failed",
                operation=func.__name__,
                error_type=type(exc).__name__,
            )
            raise StoreUnavailableError(
                details={"operation": func.__name__},
            ) from exc

    return wrapper


class SqlIdentityStore:
    """Identity store backed by the relational schema.

    Every call runs a fresh query against the session; nothing is cached
    between calls.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @store_call
    async def find_user_by_id(self, user_id: UUID) -> UserRecord | None:
        result = await self.session.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        return UserRecord.model_validate(user) if user else None

    @store_call
    async def find_user_by_login(self, username: str) -> UserRecord | None:
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        user = result.scalar_one_or_none()
        return UserRecord.model_validate(user) if user else None

    @store_call
    async def roles_of_user(self, user_id: UUID) -> list[RoleRecord]:
        stmt = (
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
            .order_by(Role.level.desc(), Role.name)
        )
        result = await self.session.execute(stmt)
        return [RoleRecord.model_validate(role) for role in result.scalars().all()]

    @store_call
    async def permissions_of_user(self, user_id: UUID) -> list[PermissionRecord]:
        stmt = (
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .join(UserRole, UserRole.role_id == RolePermission.role_id)
            .where(UserRole.user_id == user_id)
            .distinct()
            .order_by(Permission.resource, Permission.action, Permission.name)
        )
        result = await self.session.execute(stmt)
        return [
            PermissionRecord.model_validate(permission)
            for permission in result.scalars().all()
        ]

    @store_call
    async def role_has_permission(self, role_id: UUID, resource: str, action: str) -> bool:
        stmt = select(
            exists()
            .where(RolePermission.role_id == role_id)
            .where(RolePermission.permission_id == Permission.id)
            .where(Permission.resource == resource, Permission.action == action)
        )
        result = await self.session.execute(stmt)
        return bool(result.scalar())
