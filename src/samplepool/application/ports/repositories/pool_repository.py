"""Pool repository port."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol
from uuid import UUID

from samplepool.domain.entities import Pool


class PoolRepository(Protocol):
    """Port for pool persistence."""

    async def get_by_id(
        self, pool_id: UUID, include_deleted: bool = False, for_update: bool = False
    ) -> Pool | None:
        """Pool by id. for_update locks the row until the transaction ends."""
        ...

    async def get_by_batch(self, batch_number: str, category_id: UUID) -> Pool | None: ...

    async def list(
        self,
        *,
        user_id: UUID | None = None,
        include_inactive: bool = False,
        include_deleted: bool = False,
        include_unapproved: bool = False,
    ) -> list[Pool]: ...

    async def create(self, pool: Pool) -> Pool: ...

    async def update(self, pool: Pool) -> None: ...

    async def credit(self, pool_id: UUID, amount: Decimal) -> tuple[Pool, bool] | None:
        """Atomically add amount to amount_received and count one contributor.

        Moves the pool to Target Reached when the new total covers pool_price.
        Returns the updated pool and whether this call made the transition,
        or None if the pool does not exist.
        """
        ...

    async def soft_delete(self, pool_id: UUID) -> None: ...

    async def hard_delete(self, pool_id: UUID) -> None: ...

    async def restore(self, pool_id: UUID) -> None: ...
