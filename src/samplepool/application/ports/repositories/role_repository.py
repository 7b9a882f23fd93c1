"""Role repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from samplepool.domain.entities import Role


class RoleRepository(Protocol):
    """Port for role persistence. Returned roles carry their permissions."""

    async def get_by_id(self, role_id: UUID, include_deleted: bool = False) -> Role | None: ...

    async def get_by_name(self, name: str) -> Role | None: ...

    async def get_many(self, role_ids: list[UUID]) -> list[Role]: ...

    async def list(self, include_deleted: bool = False) -> list[Role]: ...

    async def create(self, role: Role) -> Role: ...

    async def update(self, role: Role) -> None: ...

    async def set_permissions(self, role_id: UUID, permission_ids: list[UUID]) -> None: ...

    async def soft_delete(self, role_id: UUID) -> None: ...

    async def restore(self, role_id: UUID) -> None: ...
