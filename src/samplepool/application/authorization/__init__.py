"""Authorization - ability evaluation, access guard and response shaping."""

from samplepool.application.authorization.ability import (
    Ability,
    Grant,
    build_ability,
    effective_permissions,
    is_superadmin,
)
from samplepool.application.authorization.access_guard import AccessGuard
from samplepool.application.authorization.operations import (
    OPERATIONS,
    Operation,
    RequiredPermission,
    get_operation,
)
from samplepool.application.authorization.response_shaper import ResponseShaper, to_jsonable

__all__ = [
    "OPERATIONS",
    "Ability",
    "AccessGuard",
    "Grant",
    "Operation",
    "RequiredPermission",
    "ResponseShaper",
    "build_ability",
    "effective_permissions",
    "get_operation",
    "is_superadmin",
    "to_jsonable",
]
