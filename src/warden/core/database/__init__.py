"""Database layer - session management, base models, and mixins."""

from warden.core.database.base import AssignedAtMixin, Base, TimestampMixin, UUIDMixin
from warden.core.database.session import (
    create_engine,
    create_session_factory,
    get_db,
)


__all__ = [
    "AssignedAtMixin",
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_engine",
    "create_session_factory",
    "get_db",
]
