"""Unit tests for AuthorizationResolver.

These tests verify:
- Permission evaluation through roles
- Role membership predicates
- Derived access (admin flag, resources, level)
"""

import pytest

from tests.factories.memory_store import InMemoryIdentityStore
from tests.factories.records import (
    PermissionRecordFactory,
    RoleRecordFactory,
    UserRecordFactory,
)
from warden.core.errors import StoreUnavailableError
from warden.core.identity import IdentityStore, UserRecord
from warden.core.permissions.checker import AuthorizationResolver


pytestmark = pytest.mark.unit


@pytest.fixture
def store() -> InMemoryIdentityStore:
    return InMemoryIdentityStore()


@pytest.fixture
def resolver(store: InMemoryIdentityStore) -> AuthorizationResolver:
    return AuthorizationResolver(store)


@pytest.fixture
def articles_read():
    return PermissionRecordFactory.build(name="articles.read", resource="articles", action="read")


@pytest.fixture
def articles_update():
    return PermissionRecordFactory.build(
        name="articles.update", resource="articles", action="update"
    )


@pytest.fixture
def reports_export():
    return PermissionRecordFactory.build(
        name="reports.export", resource="reports", action="export"
    )


@pytest.fixture
def alice(store, articles_read, articles_update) -> UserRecord:
    """alice holds Editor (articles read+update) and Viewer (articles read)."""
    user = store.add_user(UserRecordFactory.build(username="alice"))
    editor = store.add_role(
        RoleRecordFactory.build(name="Editor", level=50), articles_read, articles_update
    )
    viewer = store.add_role(RoleRecordFactory.build(name="Viewer", level=10), articles_read)
    store.assign(user, [editor, viewer])
    return user


@pytest.fixture
def bob(store) -> UserRecord:
    """bob holds no roles."""
    return store.add_user(UserRecordFactory.build(username="bob"))


def test_in_memory_store_satisfies_protocol(store):
    assert isinstance(store, IdentityStore)


class TestHasPermission:
    """Tests for has_permission."""

    async def test_granted_through_role(self, resolver, alice):
        assert await resolver.has_permission(alice.id, "articles", "update") is True

    async def test_requires_exact_pair(self, resolver, alice):
        assert await resolver.has_permission(alice.id, "articles", "delete") is False
        assert await resolver.has_permission(alice.id, "comments", "update") is False

    async def test_user_without_roles(self, resolver, bob):
        assert await resolver.has_permission(bob.id, "articles", "read") is False

    async def test_unknown_user(self, resolver):
        assert await resolver.has_permission(UserRecordFactory.build().id, "articles", "read") is False

    async def test_deleted_role_grants_nothing(self, resolver, store, alice):
        for role in await resolver.roles(alice.id):
            store.delete_role(role.id)

        assert await resolver.has_permission(alice.id, "articles", "read") is False

    async def test_level_does_not_imply_permission(self, resolver, store, reports_export):
        """A high-level role still grants only its own permissions."""
        user = store.add_user(UserRecordFactory.build())
        store.add_role(RoleRecordFactory.build(name="Exporter", level=1), reports_export)
        boss = store.add_role(RoleRecordFactory.build(name="Boss", level=1000))
        store.assign(user, [boss])

        assert await resolver.has_permission(user.id, "reports", "export") is False

    async def test_store_failure_propagates(self, resolver, store, alice):
        store.available = False

        with pytest.raises(StoreUnavailableError):
            await resolver.has_permission(alice.id, "articles", "read")


class TestRoles:
    """Tests for role predicates."""

    async def test_role_names(self, resolver, alice):
        assert await resolver.role_names(alice.id) == {"Editor", "Viewer"}

    async def test_has_role_is_exact(self, resolver, alice):
        assert await resolver.has_role(alice.id, "Editor") is True
        assert await resolver.has_role(alice.id, "editor") is False

    async def test_has_any_role(self, resolver, alice):
        assert await resolver.has_any_role(alice.id, ["Admin", "Viewer"]) is True
        assert await resolver.has_any_role(alice.id, ["Admin", "Owner"]) is False

    async def test_has_any_role_empty_list(self, resolver, alice):
        assert await resolver.has_any_role(alice.id, []) is False

    async def test_has_all_roles(self, resolver, alice):
        assert await resolver.has_all_roles(alice.id, ["Viewer", "Editor"]) is True
        assert await resolver.has_all_roles(alice.id, ["Editor", "Admin"]) is False

    async def test_has_all_roles_ignores_duplicates(self, resolver, alice):
        assert await resolver.has_all_roles(alice.id, ["Editor", "Editor"]) is True

    async def test_has_all_roles_empty_list(self, resolver, bob):
        assert await resolver.has_all_roles(bob.id, []) is True

    @pytest.mark.parametrize("method", ["has_any_role", "has_all_roles"])
    async def test_bare_string_is_rejected(self, resolver, alice, method):
        """A single name must be wrapped in a list, not passed as a string."""
        with pytest.raises(TypeError):
            await getattr(resolver, method)(alice.id, "Editor")

    async def test_tuple_and_set_accepted(self, resolver, alice):
        assert await resolver.has_all_roles(alice.id, ("Editor", "Viewer")) is True
        assert await resolver.has_any_role(alice.id, {"Viewer"}) is True


class TestIsAdmin:
    """Tests for is_admin."""

    @pytest.mark.parametrize("name", ["Super Admin", "Admin"])
    async def test_admin_role_names(self, resolver, store, name):
        user = store.add_user(UserRecordFactory.build())
        store.assign(user, [store.add_role(RoleRecordFactory.build(name=name))])

        assert await resolver.is_admin(user.id) is True

    async def test_match_is_by_name_not_level(self, resolver, store):
        user = store.add_user(UserRecordFactory.build())
        store.assign(
            user, [store.add_role(RoleRecordFactory.build(name="Administrator", level=100))]
        )

        assert await resolver.is_admin(user.id) is False

    async def test_regular_user(self, resolver, alice):
        assert await resolver.is_admin(alice.id) is False


class TestDerivedAccess:
    """Tests for permissions, resources and level."""

    async def test_permissions_are_distinct(self, resolver, alice):
        """articles.read comes through two roles but is listed once."""
        keys = sorted(permission.key for permission in await resolver.permissions(alice.id))

        assert keys == ["articles:read", "articles:update"]

    async def test_can_access_resource(self, resolver, alice):
        assert await resolver.can_access_resource(alice.id, "articles") is True
        assert await resolver.can_access_resource(alice.id, "reports") is False

    async def test_accessible_resources(self, resolver, store, alice, reports_export):
        store.assign(
            alice, [store.add_role(RoleRecordFactory.build(name="Analyst"), reports_export)]
        )

        assert await resolver.accessible_resources(alice.id) == {"articles", "reports"}

    async def test_permission_level_is_highest(self, resolver, alice):
        assert await resolver.permission_level(alice.id) == 50

    async def test_permission_level_without_roles(self, resolver, bob):
        assert await resolver.permission_level(bob.id) == 0

    async def test_nothing_without_roles(self, resolver, bob):
        assert await resolver.roles(bob.id) == []
        assert await resolver.permissions(bob.id) == []
        assert await resolver.accessible_resources(bob.id) == set()
