"""Pytest configuration and shared fixtures."""

import os


# Fast hashing for tests; must be set before the password context is built
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import AsyncGenerator  # noqa: E402
from pathlib import Path  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession  # noqa: E402

from tests.factories.records import FACTORY_PASSWORD  # noqa: E402
from warden.config import Settings  # noqa: E402
from warden.core.database import (  # noqa: E402
    Base,
    create_engine,
    create_session_factory,
    get_db,
)

# Import all models to ensure they're registered with Base.metadata
from warden.core.permissions.models import (  # noqa: E402, F401
    Permission,
    Role,
    RolePermission,
    UserRole,
)
from warden.core.permissions.repos import PermissionRepository, RoleRepository  # noqa: E402
from warden.main import create_app  # noqa: E402
from warden.modules.users.models import User  # noqa: E402, F401
from warden.modules.users.repos import UserRepository  # noqa: E402


TEST_SECRET_KEY = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite database."""
    return Settings(
        secret_key=TEST_SECRET_KEY,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'warden.db'}",
        bcrypt_rounds=4,
        environment="test",
    )


@pytest.fixture
async def engine(settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine with the schema in place."""
    engine = create_engine(settings)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for tests; nothing is committed."""
    session_factory = create_session_factory(engine)

    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def app(settings: Settings, db: AsyncSession) -> AsyncGenerator[FastAPI, None]:
    """Create test application instance sharing the test session."""
    application = create_app(settings)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# Access graph fixtures
# ============================================================


@pytest.fixture
def users(db: AsyncSession) -> UserRepository:
    return UserRepository(db)


@pytest.fixture
def roles(db: AsyncSession) -> RoleRepository:
    return RoleRepository(db)


@pytest.fixture
def permissions(db: AsyncSession) -> PermissionRepository:
    return PermissionRepository(db)


@pytest.fixture
async def graph(
    users: UserRepository,
    roles: RoleRepository,
    permissions: PermissionRepository,
) -> dict[str, UUID]:
    """A small access graph.

    alice holds Editor (articles:read, articles:update) and Viewer
    (articles:read). bob holds nothing. carol holds Admin.
    """
    alice = await users.create("alice", "alice@example.com", FACTORY_PASSWORD)
    bob = await users.create("bob", "bob@example.com", FACTORY_PASSWORD)
    carol = await users.create("carol", "carol@example.com", FACTORY_PASSWORD)

    editor = await roles.create("Editor", level=50)
    viewer = await roles.create("Viewer", level=10)
    admin = await roles.create("Admin", level=90)

    read = await permissions.create("articles.read", "articles", "read")
    update = await permissions.create("articles.update", "articles", "update")

    await roles.grant_permission(editor.id, read.id)
    await roles.grant_permission(editor.id, update.id)
    await roles.grant_permission(viewer.id, read.id)

    await users.assign_role(alice.id, editor.id)
    await users.assign_role(alice.id, viewer.id)
    await users.assign_role(carol.id, admin.id)

    return {
        "alice": alice.id,
        "bob": bob.id,
        "carol": carol.id,
        "editor": editor.id,
        "viewer": viewer.id,
        "admin": admin.id,
        "articles.read": read.id,
        "articles.update": update.id,
    }
