"""Update, delete and restore role use cases."""

from datetime import UTC, datetime
from uuid import UUID

from samplepool.domain.entities import Role
from samplepool.domain.exceptions import Conflict, NotFound, ValidationError


class UpdateRoleUseCase:
    """Change name, description or active flag. None leaves a field unchanged."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        role_id: UUID,
        name: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> Role:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if role is None:
                raise NotFound("Role", str(role_id))

            if name is not None:
                name = name.strip()
                if not name:
                    raise ValidationError("Role name is required")
                if name != role.name:
                    if role.is_superadmin:
                        raise Conflict("Cannot rename superadmin role")
                    if await uow.roles.get_by_name(name):
                        raise Conflict(f'Role with name "{name}" already exists')
                    role.name = name
            if description is not None:
                role.description = description
            if is_active is not None:
                role.is_active = is_active
            role.updated_at = datetime.now(UTC)
            await uow.roles.update(role)
        return role


class DeleteRoleUseCase:
    """Soft delete role. The superadmin role cannot be deleted."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, role_id: UUID) -> None:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if role is None:
                raise NotFound("Role", str(role_id))
            if role.is_superadmin:
                raise Conflict("Cannot delete superadmin role")
            await uow.roles.soft_delete(role_id)


class RestoreRoleUseCase:
    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, role_id: UUID) -> Role:
        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id, include_deleted=True)
            if role is None or role.deleted_at is None:
                raise NotFound("Deleted role", str(role_id))
            await uow.roles.restore(role_id)
            role.deleted_at = None
        return role
