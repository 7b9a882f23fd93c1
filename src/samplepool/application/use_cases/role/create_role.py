"""Create role use case."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from samplepool.domain.entities import Role
from samplepool.domain.exceptions import Conflict, NotFound, ValidationError


class CreateRoleUseCase:
    """Create role, optionally with an initial permission set."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        name: str,
        description: str | None = None,
        is_active: bool = True,
        permission_ids: list[UUID] | None = None,
    ) -> Role:
        name = name.strip()
        if not name:
            raise ValidationError("Role name is required")

        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(name):
                raise Conflict(f'Role with name "{name}" already exists')

            permissions = []
            if permission_ids:
                permissions = await uow.permissions.get_many(permission_ids)
                if len(permissions) != len(set(permission_ids)):
                    raise NotFound("One or more permissions")

            now = datetime.now(UTC)
            role = Role(
                id=uuid4(),
                name=name,
                created_at=now,
                updated_at=now,
                description=description,
                is_active=is_active,
                permissions=permissions,
            )
            await uow.roles.create(role)
            if permissions:
                await uow.roles.set_permissions(role.id, [p.id for p in permissions])
        return role
