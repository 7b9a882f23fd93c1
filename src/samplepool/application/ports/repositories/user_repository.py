"""User repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from samplepool.domain.entities import User


class UserRepository(Protocol):
    """Port for user persistence. Returned users carry roles and role permissions."""

    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def list(self) -> list[User]: ...

    async def create(self, user: User) -> User: ...

    async def update(self, user: User) -> None: ...

    async def set_roles(self, user_id: UUID, role_ids: list[UUID]) -> None: ...

    async def delete(self, user_id: UUID) -> None: ...
