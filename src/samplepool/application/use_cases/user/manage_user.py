"""User account use cases."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from samplepool.domain.entities import User
from samplepool.domain.exceptions import Conflict, NotFound, ValidationError
from samplepool.domain.value_objects import normalize_email


async def _load_roles(uow, role_ids: list[UUID]):
    roles = await uow.roles.get_many(role_ids)
    if len(roles) != len(set(role_ids)):
        raise NotFound("One or more roles")
    return roles


class CreateUserUseCase:
    """Register a local user record. Credentials live in the identity provider."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        name: str,
        email: str,
        is_active: bool = True,
        role_ids: list[UUID] | None = None,
    ) -> User:
        name = (name or "").strip()
        if not name:
            raise ValidationError("name is required")
        email = normalize_email(email)

        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(email):
                raise Conflict(f'User with email "{email}" already exists')
            roles = await _load_roles(uow, role_ids) if role_ids else []
            now = datetime.now(UTC)
            user = User(
                id=uuid4(),
                name=name,
                email=email,
                created_at=now,
                updated_at=now,
                is_active=is_active,
                roles=roles,
            )
            await uow.users.create(user)
            if roles:
                await uow.users.set_roles(user.id, [r.id for r in roles])
        return user


class UpdateUserUseCase:
    """Partial update; role_ids, when given, replaces the role set."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(
        self,
        user_id: UUID,
        name: str | None = None,
        email: str | None = None,
        is_active: bool | None = None,
        role_ids: list[UUID] | None = None,
    ) -> User:
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
            if user is None:
                raise NotFound("User", str(user_id))
            if name is not None:
                name = name.strip()
                if not name:
                    raise ValidationError("name is required")
                user.name = name
            if email is not None:
                email = normalize_email(email)
                if email != user.email and await uow.users.get_by_email(email):
                    raise Conflict(f'User with email "{email}" already exists')
                user.email = email
            if is_active is not None:
                user.is_active = is_active
            user.updated_at = datetime.now(UTC)
            await uow.users.update(user)
            if role_ids is not None:
                user.roles = await _load_roles(uow, role_ids) if role_ids else []
                await uow.users.set_roles(user.id, [r.id for r in user.roles])
        return user


class DeleteUserUseCase:
    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, user_id: UUID) -> None:
        async with self._uow_factory() as uow:
            if await uow.users.get_by_id(user_id) is None:
                raise NotFound("User", str(user_id))
            await uow.users.delete(user_id)
