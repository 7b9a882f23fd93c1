"""Operation table - required permissions and response visibility per API operation."""

from dataclasses import dataclass

from samplepool.domain.value_objects import Action, ResourceType
from samplepool.domain.value_objects import SerializationGroup as G


@dataclass(frozen=True)
class RequiredPermission:
    """One (action, resource) requirement of an operation."""

    action: Action
    resource: ResourceType


@dataclass(frozen=True)
class Operation:
    """Access and serialization settings of one API operation.

    public: callable without a principal.
    permissions: all must be granted (conjunctive).
    groups: visibility groups of the result; None returns it unfiltered.
    """

    name: str
    public: bool = False
    permissions: tuple[RequiredPermission, ...] = ()
    groups: tuple[G, ...] | None = None


def _op(
    name: str,
    *requirements: tuple[Action, ResourceType],
    public: bool = False,
    groups: tuple[G, ...] | None = None,
) -> Operation:
    return Operation(
        name=name,
        public=public,
        permissions=tuple(RequiredPermission(a, r) for a, r in requirements),
        groups=groups,
    )


C, R, U, D, M = Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE, Action.MANAGE
USER, ROLE, PERMISSION, ALL = (
    ResourceType.USER,
    ResourceType.ROLE,
    ResourceType.PERMISSION,
    ResourceType.ALL,
)

_ADMIN = (G.ADMIN,)
_ADMIN_USER = (G.ADMIN, G.USER)
_EVERYONE = (G.ADMIN, G.USER, G.PUBLIC)
_PUBLIC_USER = (G.PUBLIC, G.USER)

OPERATIONS: dict[str, Operation] = {
    op.name: op
    for op in [
        _op("health", public=True),
        # users
        _op("users.create", (C, USER), groups=_ADMIN_USER),
        _op("users.list", (R, USER), groups=_ADMIN_USER),
        _op("users.get", (R, USER), groups=_ADMIN_USER),
        _op("users.update", (U, USER), groups=_ADMIN_USER),
        _op("users.delete", (D, USER)),
        _op("users.me", groups=_ADMIN_USER),
        # roles
        _op("roles.create", (C, ROLE), groups=_ADMIN),
        _op("roles.list", (R, ROLE), groups=_ADMIN_USER),
        _op("roles.get", (R, ROLE), groups=_ADMIN_USER),
        _op("roles.update", (U, ROLE), groups=_ADMIN),
        _op("roles.delete", (D, ROLE)),
        _op("roles.restore", (U, ROLE), groups=_ADMIN),
        _op("roles.assign_permissions", (U, ROLE), groups=_ADMIN),
        _op("roles.remove_permissions", (U, ROLE), groups=_ADMIN),
        # permissions
        _op("permissions.create", (C, PERMISSION), groups=_ADMIN_USER),
        _op("permissions.list", (R, PERMISSION), groups=_ADMIN_USER),
        _op("permissions.get", (R, PERMISSION), groups=_ADMIN_USER),
        _op("permissions.update", (U, PERMISSION), groups=_ADMIN_USER),
        _op("permissions.delete", (D, PERMISSION)),
        _op("permissions.restore", (U, PERMISSION), groups=_ADMIN_USER),
        # sample products
        _op("sample_products.create", (M, ALL), groups=_ADMIN),
        _op("sample_products.list", public=True, groups=_EVERYONE),
        _op("sample_products.get", public=True, groups=_EVERYONE),
        _op("sample_products.update", (M, ALL), groups=_ADMIN),
        _op("sample_products.delete", (M, ALL)),
        _op("sample_products.restore", (M, ALL), groups=_ADMIN),
        # pools: ownership is enforced by the use cases; moderation needs manage on all
        _op("pools.create", groups=_EVERYONE),
        _op("pools.list", public=True, groups=_EVERYONE),
        _op("pools.mine", groups=_EVERYONE),
        _op("pools.get", public=True, groups=_EVERYONE),
        _op("pools.update", groups=_EVERYONE),
        _op("pools.delete"),
        _op("pools.hard_delete", (M, ALL)),
        _op("pools.restore", (M, ALL), groups=_EVERYONE),
        _op("pools.approve", (M, ALL), groups=_EVERYONE),
        _op("pools.reject", (M, ALL), groups=_EVERYONE),
        # donations
        _op("donations.create_order", public=True),
        _op("donations.verify_payment", public=True, groups=_PUBLIC_USER),
        _op("donations.list", (M, ALL), groups=_ADMIN_USER),
        _op("donations.get", public=True, groups=_PUBLIC_USER),
        _op("donations.by_pool", public=True, groups=_PUBLIC_USER),
        _op("donations.pool_stats", public=True),
        _op("donations.mine", groups=(G.USER,)),
    ]
}


def get_operation(name: str) -> Operation:
    """Look up an operation by name. Unknown names are a programming error."""
    return OPERATIONS[name]
