"""Read models handed out by the identity store.

The authorization core only ever sees these records, never ORM rows, so it
stays independent of how the store is implemented.
"""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserStatus(StrEnum):
    """Lifecycle status of a user account."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class Identity(BaseModel):
    """The resolved snapshot of a user carried through a request.

    Attributes:
        id: The user's UUID
        username: Login name
        email: Contact address
        status: Lifecycle status at the time the snapshot was taken
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    username: str
    email: str
    status: UserStatus


class UserRecord(BaseModel):
    """A user row as returned by the store, including the password digest."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    password_hash: str = Field(repr=False, exclude=True)
    first_name: str | None = None
    last_name: str | None = None
    status: UserStatus = UserStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_identity(self) -> Identity:
        """Project the record onto the identity snapshot."""
        return Identity(
            id=self.id,
            username=self.username,
            email=self.email,
            status=self.status,
        )


class RoleRecord(BaseModel):
    """A role row as returned by the store."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    name: str
    description: str | None = None
    level: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PermissionRecord(BaseModel):
    """A permission row as returned by the store."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: UUID
    name: str
    resource: str
    action: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def key(self) -> str:
        """The permission as 'resource:action'."""
        return f"{self.resource}:{self.action}"
