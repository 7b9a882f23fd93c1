"""Assign and remove role permissions."""

from uuid import UUID

from samplepool.domain.entities import Role
from samplepool.domain.exceptions import NotFound


class AssignRolePermissionsUseCase:
    """Replace the role's permission set with permission_ids."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, role_id: UUID, permission_ids: list[UUID]) -> Role:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if role is None:
                raise NotFound("Role", str(role_id))
            permissions = await uow.permissions.get_many(permission_ids)
            if len(permissions) != len(set(permission_ids)):
                raise NotFound("One or more permissions")
            await uow.roles.set_permissions(role_id, [p.id for p in permissions])
            role.permissions = permissions
        return role


class RemoveRolePermissionsUseCase:
    """Detach permission_ids from the role; unknown ids are ignored."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, role_id: UUID, permission_ids: list[UUID]) -> Role:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if role is None:
                raise NotFound("Role", str(role_id))
            drop = set(permission_ids)
            remaining = [p for p in role.permissions if p.id not in drop]
            await uow.roles.set_permissions(role_id, [p.id for p in remaining])
            role.permissions = remaining
        return role
