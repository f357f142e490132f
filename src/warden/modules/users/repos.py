"""User repository for database operations."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warden.core.auth.backend import hash_password
from warden.core.errors import ConflictError, NotFoundError
from warden.core.identity.schemas import UserStatus
from warden.core.permissions.models import UserRole
from warden.modules.users.models import User


class UserRepository:
    """Repository for User database operations and role assignments."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        username: str,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
        status: UserStatus = UserStatus.ACTIVE,
    ) -> User:
        """Create a new user with a hashed password.

        Raises:
            ConflictError: If the username or email is already taken
        """
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            status=status.value,
        )
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Username or email already registered",
                details={"username": username},
            ) from exc
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get a user by ID."""
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        """Get a user by exact login name."""
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        """List every user, by login name."""
        result = await self.session.execute(select(User).order_by(User.username))
        return list(result.scalars().all())

    async def update(
        self,
        user_id: UUID,
        *,
        username: str | None = None,
        email: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        status: UserStatus | None = None,
        password: str | None = None,
    ) -> User:
        """Change a user's profile. None leaves a field as is.

        A new password is hashed before it is stored.

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the new username or email is already taken
        """
        user = await self.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", resource="user", resource_id=str(user_id))

        if username is not None:
            user.username = username
        if email is not None:
            user.email = email
        if first_name is not None:
            user.first_name = first_name
        if last_name is not None:
            user.last_name = last_name
        if status is not None:
            user.status = status.value
        if password is not None:
            user.password_hash = hash_password(password)

        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Username or email already registered",
                details={"username": username, "email": email},
            ) from exc
        await self.session.refresh(user)
        return user

    async def set_status(self, user_id: UUID, status: UserStatus) -> User:
        """Change a user's lifecycle status.

        Raises:
            NotFoundError: If the user does not exist
        """
        return await self.update(user_id, status=status)

    async def delete(self, user_id: UUID) -> bool:
        """Delete a user; role assignments go with it.

        Returns:
            True if a user was deleted
        """
        result = await self.session.execute(delete(User).where(User.id == user_id))
        await self.session.flush()
        return result.rowcount > 0

    async def assign_role(self, user_id: UUID, role_id: UUID) -> bool:
        """Assign a role to a user. Assigning twice is a no-op.

        Returns:
            True if a new assignment was recorded
        """
        existing = await self.session.get(UserRole, (user_id, role_id))
        if existing is not None:
            return False
        self.session.add(UserRole(user_id=user_id, role_id=role_id))
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise NotFoundError(
                "User or role not found",
                details={"user_id": str(user_id), "role_id": str(role_id)},
            ) from exc
        return True

    async def remove_role(self, user_id: UUID, role_id: UUID) -> bool:
        """Remove a role from a user.

        Returns:
            True if an assignment was removed
        """
        result = await self.session.execute(
            delete(UserRole).where(
                UserRole.user_id == user_id,
                UserRole.role_id == role_id,
            )
        )
        await self.session.flush()
        return result.rowcount > 0
