"""Response shaping - hides fields the caller's tier may not see."""

import dataclasses
import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from samplepool.application.authorization.ability import build_ability, is_superadmin
from samplepool.application.authorization.operations import Operation, get_operation
from samplepool.domain.entities import Donation, Permission, Pool, Role, SampleProduct, User
from samplepool.domain.value_objects import Action, ResourceType, quantize
from samplepool.domain.value_objects import SerializationGroup as G

logger = logging.getLogger(__name__)

_ALL = frozenset({G.PUBLIC, G.USER, G.ADMIN})
_MEMBERS = frozenset({G.USER, G.ADMIN})
_ADMIN = frozenset({G.ADMIN})

# Dropped even when a result is returned unfiltered.
SECRET_FIELDS = frozenset({"password_hash"})

# Fields missing from an entity's table (e.g. User.password_hash) are never emitted.
FIELD_VISIBILITY: dict[type, dict[str, frozenset[G]]] = {
    User: {
        "id": _MEMBERS,
        "name": _MEMBERS,
        "email": _MEMBERS,
        "is_active": _ADMIN,
        "roles": _MEMBERS,
        "created_at": _ADMIN,
        "updated_at": _ADMIN,
    },
    Role: {
        "id": _MEMBERS,
        "name": _MEMBERS,
        "description": _MEMBERS,
        "permissions": _MEMBERS,
        "is_active": _ADMIN,
        "created_at": _ADMIN,
        "updated_at": _ADMIN,
        "deleted_at": _ADMIN,
    },
    Permission: {
        "id": _MEMBERS,
        "name": _MEMBERS,
        "resource": _MEMBERS,
        "action": _MEMBERS,
        "description": _MEMBERS,
        "is_active": _ADMIN,
        "created_at": _ADMIN,
        "updated_at": _ADMIN,
        "deleted_at": _ADMIN,
    },
    SampleProduct: {
        "id": _ALL,
        "name": _ALL,
        "code": _ALL,
        "description": _ALL,
        "is_active": _ADMIN,
        "created_at": _ADMIN,
        "updated_at": _ADMIN,
        "deleted_at": _ADMIN,
    },
    Pool: {
        "id": _ALL,
        "name": _ALL,
        "sample_source": _ALL,
        "batch_number": _ALL,
        "description": _ALL,
        "category_id": _ALL,
        "pool_price": _ALL,
        "amount_received": _ALL,
        "remaining_amount": _ALL,
        "total_contributors": _ALL,
        "status": _ALL,
        "user_id": _ADMIN,
        "is_active": _ADMIN,
        "is_approved": _ADMIN,
        "created_at": _ADMIN,
        "updated_at": _ADMIN,
        "deleted_at": _ADMIN,
    },
    Donation: {
        "id": _ALL,
        "pool_id": _ALL,
        "amount": _ALL,
        "message": _ALL,
        "status": _ALL,
        "created_at": _ALL,
        "user_id": _MEMBERS,
        "anonymous_donor_name": _MEMBERS,
        "anonymous_donor_email": _ADMIN,
        "anonymous_donor_phone": _ADMIN,
        "payment_order_id": _ADMIN,
        "payment_id": _ADMIN,
        "payment_signature": _ADMIN,
        "updated_at": _ADMIN,
    },
}


def to_jsonable(value: Any) -> Any:
    """Convert value to something the JSON media handler can encode. No filtering."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        # money stays exact: "100.00", not 100.0
        return str(quantize(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_jsonable(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if f.name not in SECRET_FIELDS
        }
    return value


class ResponseShaper:
    """Filters result fields by the caller's tier (public < user < admin)."""

    def __init__(self, visibility: dict[type, dict[str, frozenset[G]]] | None = None) -> None:
        self._visibility = visibility if visibility is not None else FIELD_VISIBILITY

    def tier_for(self, principal: User | None) -> G:
        """Classify principal: anonymous, plain user, or admin (superadmin or manage on user)."""
        if principal is None:
            return G.PUBLIC
        if is_superadmin(principal):
            return G.ADMIN
        if build_ability(principal).can(Action.MANAGE, ResourceType.USER):
            return G.ADMIN
        return G.USER

    @staticmethod
    def active_groups(tier: G, declared: tuple[G, ...]) -> frozenset[G]:
        """Declared groups reachable at tier."""
        return frozenset(g for g in declared if g.rank <= tier.rank)

    def shape(self, principal: User | None, data: Any, operation: Operation | str) -> Any:
        """Shape an operation result for principal.

        Handles single entities, lists and paginated dicts ({"items": [...], ...}).
        Operations without declared groups return data unfiltered.
        """
        if isinstance(operation, str):
            operation = get_operation(operation)
        if data is None or operation.groups is None:
            return to_jsonable(data)

        groups = self.active_groups(self.tier_for(principal), operation.groups)
        if isinstance(data, (list, tuple)):
            return [self._shape_item(item, groups) for item in data]
        if isinstance(data, dict) and isinstance(data.get("items"), list):
            shaped = {k: to_jsonable(v) for k, v in data.items() if k != "items"}
            shaped["items"] = [self._shape_item(item, groups) for item in data["items"]]
            return shaped
        return self._shape_item(data, groups)

    def _shape_item(self, item: Any, groups: frozenset[G]) -> Any:
        visibility = self._visibility.get(type(item))
        if visibility is None:
            return to_jsonable(item)
        try:
            return {
                name: self._shape_value(getattr(item, name), groups)
                for name, field_groups in visibility.items()
                if field_groups & groups
            }
        except Exception:
            logger.warning("Could not shape %s, returning it unfiltered", type(item).__name__, exc_info=True)
            return to_jsonable(item)

    def _shape_value(self, value: Any, groups: frozenset[G]) -> Any:
        if type(value) in self._visibility:
            return self._shape_item(value, groups)
        if isinstance(value, (list, tuple)):
            return [self._shape_value(v, groups) for v in value]
        return to_jsonable(value)
