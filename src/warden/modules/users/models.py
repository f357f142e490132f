"""User database models."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from warden.core.constants import (
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_STATUS_LENGTH,
    MAX_USERNAME_LENGTH,
)
from warden.core.database.base import Base, TimestampMixin, UUIDMixin
from warden.core.identity.schemas import UserStatus


class User(Base, UUIDMixin, TimestampMixin):
    """User model representing an account that can log in.

    Attributes:
        username: Unique, case-sensitive login name
        email: Unique contact address
        password_hash: Bcrypt digest; never leaves the store layer
        first_name: Given name
        last_name: Family name
        status: Lifecycle status (active, inactive, suspended)
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(MAX_USERNAME_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        unique=True,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    first_name: Mapped[str | None] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=True,
    )
    last_name: Mapped[str | None] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(MAX_STATUS_LENGTH),
        default=UserStatus.ACTIVE.value,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, status={self.status})>"
