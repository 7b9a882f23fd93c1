"""Permission repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from samplepool.domain.entities import Permission


class PermissionRepository(Protocol):
    """Port for permission persistence."""

    async def get_by_id(
        self, permission_id: UUID, include_deleted: bool = False
    ) -> Permission | None: ...

    async def get_by_name(self, name: str) -> Permission | None: ...

    async def get_many(self, permission_ids: list[UUID]) -> list[Permission]: ...

    async def list(self, include_deleted: bool = False) -> list[Permission]: ...

    async def list_by_resource(self, resource: str) -> list[Permission]: ...

    async def create(self, permission: Permission) -> Permission: ...

    async def update(self, permission: Permission) -> None: ...

    async def soft_delete(self, permission_id: UUID) -> None: ...

    async def restore(self, permission_id: UUID) -> None: ...
