"""Unit tests for the access guard."""

import pytest

from samplepool.application.authorization import AccessGuard, Operation, RequiredPermission
from samplepool.domain.exceptions import AuthenticationRequired, PermissionDenied
from samplepool.domain.value_objects import Action, ResourceType

from tests.conftest import make_permission, make_role, make_superadmin, make_user


@pytest.fixture
def guard() -> AccessGuard:
    return AccessGuard()


def test_public_operation_allows_anonymous(guard: AccessGuard) -> None:
    """Public operations without requirements pass with no principal."""
    assert guard.authorize(None, "pools.list") is None
    assert guard.authorize(None, "donations.create_order") is None


def test_protected_operation_requires_principal(guard: AccessGuard) -> None:
    """Non-public operations reject anonymous callers."""
    with pytest.raises(AuthenticationRequired, match="Authentication required"):
        guard.authorize(None, "users.list")


def test_authenticated_operation_without_requirements(guard: AccessGuard) -> None:
    """users.me needs a principal but no permission."""
    with pytest.raises(AuthenticationRequired):
        guard.authorize(None, "users.me")
    assert guard.authorize(make_user(), "users.me") is not None


def test_missing_permission_is_denied(guard: AccessGuard) -> None:
    """A user without role permissions is denied."""
    user = make_user([make_role("user", [make_permission("user", "read")])])
    with pytest.raises(PermissionDenied, match="Insufficient permissions"):
        guard.authorize(user, "roles.create")


def test_requirements_are_conjunctive(guard: AccessGuard) -> None:
    """Every requirement must pass."""
    op = Operation(
        name="custom",
        permissions=(
            RequiredPermission(Action.READ, ResourceType.USER),
            RequiredPermission(Action.READ, ResourceType.ROLE),
        ),
    )
    partial = make_user([make_role("r", [make_permission("user", "read")])])
    full = make_user(
        [make_role("r", [make_permission("user", "read"), make_permission("role", "read")])]
    )
    with pytest.raises(PermissionDenied):
        guard.authorize(partial, op)
    assert guard.authorize(full, op).can(Action.READ, ResourceType.ROLE)


def test_instance_scoped_grant(guard: AccessGuard) -> None:
    """A role-less user passes users.get only for its own record."""
    user = make_user()
    guard.authorize(user, "users.get", instance=user)
    with pytest.raises(PermissionDenied):
        guard.authorize(user, "users.get", instance=make_user())
    with pytest.raises(PermissionDenied):
        guard.authorize(user, "users.list")


def test_pool_moderation_needs_manage_all(guard: AccessGuard) -> None:
    """Pool moderation is reserved for manage-all holders."""
    admin = make_user([make_role("admin", [make_permission("user", "manage")])])
    with pytest.raises(PermissionDenied):
        guard.authorize(admin, "pools.approve")
    guard.authorize(make_superadmin(), "pools.approve")


def test_public_operation_with_principal_returns_ability(guard: AccessGuard) -> None:
    """Authenticated callers of public operations get their ability back."""
    ability = guard.authorize(make_superadmin(), "pools.get")
    assert ability.can(Action.MANAGE, ResourceType.ALL)


def test_pool_authoring_needs_no_grant(guard: AccessGuard) -> None:
    """Creating and editing pools only needs a signed-in caller."""
    member = make_user([make_role("member", [make_permission("user", "read")])])
    for op in ("pools.create", "pools.update", "pools.delete", "pools.mine"):
        assert guard.authorize(member, op) is not None
    with pytest.raises(AuthenticationRequired):
        guard.authorize(None, "pools.create")


def test_catalog_and_ledger_need_manage_all(guard: AccessGuard) -> None:
    """Pool authors are refused catalog writes and the donation ledger."""
    member = make_user([make_role("member", [make_permission("user", "read")])])
    for op in ("sample_products.create", "sample_products.update", "donations.list", "pools.hard_delete"):
        with pytest.raises(PermissionDenied):
            guard.authorize(member, op)
        guard.authorize(make_superadmin(), op)
