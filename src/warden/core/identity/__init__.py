"""Identity records and the store interface the authorization core reads from."""

from warden.core.identity.schemas import (
    Identity,
    PermissionRecord,
    RoleRecord,
    UserRecord,
    UserStatus,
)
from warden.core.identity.store import IdentityStore


__all__ = [
    "Identity",
    "IdentityStore",
    "PermissionRecord",
    "RoleRecord",
    "UserRecord",
    "UserStatus",
]
