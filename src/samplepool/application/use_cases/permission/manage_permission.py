"""Permission catalog use cases."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from samplepool.domain.entities import Permission
from samplepool.domain.exceptions import Conflict, NotFound, ValidationError


def _required(value: str | None, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{field} is required")
    return value


class CreatePermissionUseCase:
    """Add a permission to the catalog. resource and action are stored as given."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        name: str,
        resource: str,
        action: str,
        description: str | None = None,
        is_active: bool = True,
    ) -> Permission:
        name = _required(name, "name")
        resource = _required(resource, "resource")
        action = _required(action, "action")
        async with self._uow_factory() as uow:
            if await uow.permissions.get_by_name(name):
                raise Conflict(f'Permission with name "{name}" already exists')
            now = datetime.now(UTC)
            permission = Permission(
                id=uuid4(),
                name=name,
                resource=resource,
                action=action,
                created_at=now,
                updated_at=now,
                description=description,
                is_active=is_active,
            )
            await uow.permissions.create(permission)
        return permission


class UpdatePermissionUseCase:
    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        permission_id: UUID,
        name: str | None = None,
        resource: str | None = None,
        action: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> Permission:
        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_id(permission_id)
            if permission is None:
                raise NotFound("Permission", str(permission_id))
            if name is not None:
                name = _required(name, "name")
                if name != permission.name and await uow.permissions.get_by_name(name):
                    raise Conflict(f'Permission with name "{name}" already exists')
                permission.name = name
            if resource is not None:
                permission.resource = _required(resource, "resource")
            if action is not None:
                permission.action = _required(action, "action")
            if description is not None:
                permission.description = description
            if is_active is not None:
                permission.is_active = is_active
            permission.updated_at = datetime.now(UTC)
            await uow.permissions.update(permission)
        return permission


class DeletePermissionUseCase:
    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, permission_id: UUID) -> None:
        async with self._uow_factory() as uow:
            if await uow.permissions.get_by_id(permission_id) is None:
                raise NotFound("Permission", str(permission_id))
            await uow.permissions.soft_delete(permission_id)


class RestorePermissionUseCase:
    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, permission_id: UUID) -> Permission:
        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_id(permission_id, include_deleted=True)
            if permission is None or permission.deleted_at is None:
                raise NotFound("Deleted permission", str(permission_id))
            await uow.permissions.restore(permission_id)
            permission.deleted_at = None
        return permission
