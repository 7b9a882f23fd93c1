"""Sample product repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from samplepool.domain.entities import SampleProduct


class SampleProductRepository(Protocol):
    """Port for sample product persistence."""

    async def get_by_id(
        self, product_id: UUID, include_deleted: bool = False
    ) -> SampleProduct | None: ...

    async def get_by_name(self, name: str) -> SampleProduct | None: ...

    async def get_by_code(self, code: str) -> SampleProduct | None: ...

    async def list(
        self, *, include_inactive: bool = False, include_deleted: bool = False
    ) -> list[SampleProduct]: ...

    async def create(self, product: SampleProduct) -> SampleProduct: ...

    async def update(self, product: SampleProduct) -> None: ...

    async def soft_delete(self, product_id: UUID) -> None: ...

    async def restore(self, product_id: UUID) -> None: ...
