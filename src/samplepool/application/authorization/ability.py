"""Ability evaluation - turns a user's roles and permissions into grants.

An ability is built fresh for every request from the user snapshot loaded by
the auth middleware. Nothing here performs I/O or raises: permission rows whose
action or resource cannot be mapped simply grant nothing.
"""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from samplepool.domain.entities import Permission, User
from samplepool.domain.value_objects import Action, ResourceType


@dataclass(frozen=True)
class Grant:
    """A permitted (action, resource) pair, optionally scoped to one record id."""

    action: Action
    resource: ResourceType
    instance_id: UUID | None = None

    def matches(self, action: Action, resource: ResourceType, instance: Any = None) -> bool:
        if self.action is not Action.MANAGE and self.action is not action:
            return False
        if self.resource is not ResourceType.ALL and self.resource is not resource:
            return False
        if self.instance_id is None:
            return True
        # Scoped grants need a concrete record to compare against.
        return instance is not None and getattr(instance, "id", None) == self.instance_id


class Ability:
    """Set of grants for one user at one point in time."""

    def __init__(self, grants: list[Grant]) -> None:
        self._grants = tuple(grants)

    @property
    def grants(self) -> tuple[Grant, ...]:
        return self._grants

    def can(self, action: Action, resource: ResourceType, instance: Any = None) -> bool:
        """Check whether any grant allows action on resource (and instance, if given)."""
        return any(g.matches(action, resource, instance) for g in self._grants)

    def cannot(self, action: Action, resource: ResourceType, instance: Any = None) -> bool:
        return not self.can(action, resource, instance)


def parse_action(value: str | None) -> Action | None:
    """Map a free-form action string to Action, or None when unknown."""
    if not value:
        return None
    try:
        return Action(value.strip().lower())
    except ValueError:
        return None


def parse_resource(value: str | None) -> ResourceType | None:
    """Map a free-form resource string to ResourceType, or None when unknown."""
    if not value:
        return None
    try:
        return ResourceType(value.strip().lower())
    except ValueError:
        return None


def is_superadmin(user: User | None) -> bool:
    return user is not None and any(r.is_superadmin for r in user.roles)


def effective_permissions(user: User) -> list[Permission]:
    """Active permissions of the user's active roles, deduplicated by id, in role order."""
    seen: set[UUID] = set()
    result: list[Permission] = []
    for role in user.roles:
        if not role.is_active:
            continue
        for permission in role.permissions:
            if permission.is_active and permission.id not in seen:
                seen.add(permission.id)
                result.append(permission)
    return result


def build_ability(user: User) -> Ability:
    """Build the ability for user from its currently loaded roles and permissions."""
    if not user.roles:
        return Ability([Grant(Action.READ, ResourceType.USER, instance_id=user.id)])

    if is_superadmin(user):
        return Ability([Grant(Action.MANAGE, ResourceType.ALL)])

    grants: list[Grant] = []
    for permission in effective_permissions(user):
        action = parse_action(permission.action)
        resource = parse_resource(permission.resource)
        if action is None or resource is None:
            continue
        grant = Grant(action, resource)
        if grant not in grants:
            grants.append(grant)
    return Ability(grants)
