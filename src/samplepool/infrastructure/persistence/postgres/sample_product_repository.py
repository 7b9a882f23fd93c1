"""PostgreSQL sample product repository implementation."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID

from psycopg import AsyncConnection

from samplepool.domain.entities import SampleProduct

COLUMNS = "id, name, code, description, is_active, created_at, updated_at, deleted_at"


def _from_row(r: tuple) -> SampleProduct:
    return SampleProduct(
        id=r[0],
        name=r[1],
        code=r[2],
        description=r[3],
        is_active=r[4],
        created_at=r[5],
        updated_at=r[6],
        deleted_at=r[7],
    )


class PostgresSampleProductRepository:
    """Sample product repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def _fetch_one(self, where: str, params: tuple) -> SampleProduct | None:
        cur = await self._conn.execute(f"SELECT {COLUMNS} FROM sample_product WHERE {where}", params)
        r = await cur.fetchone()
        return _from_row(r) if r else None

    async def get_by_id(self, product_id: UUID, include_deleted: bool = False) -> SampleProduct | None:
        where = "id = %s" + ("" if include_deleted else " AND deleted_at IS NULL")
        return await self._fetch_one(where, (product_id,))

    async def get_by_name(self, name: str) -> SampleProduct | None:
        return await self._fetch_one("name = %s AND deleted_at IS NULL", (name,))

    async def get_by_code(self, code: str) -> SampleProduct | None:
        return await self._fetch_one("code = %s AND deleted_at IS NULL", (code,))

    async def list(
        self, *, include_inactive: bool = False, include_deleted: bool = False
    ) -> list[SampleProduct]:
        conditions = []
        if not include_deleted:
            conditions.append("deleted_at IS NULL")
        if not include_inactive:
            conditions.append("is_active")
        sql = f"SELECT {COLUMNS} FROM sample_product"
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        cur = await self._conn.execute(sql + " ORDER BY name")
        return [_from_row(r) for r in await cur.fetchall()]

    async def create(self, product: SampleProduct) -> SampleProduct:
        await self._conn.execute(
            """
            INSERT INTO sample_product (id, name, code, description, is_active, created_at, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            """,
            (
                product.id,
                product.name,
                product.code,
                product.description,
                product.is_active,
                product.created_at,
                product.updated_at,
            ),
        )
        return product

    async def update(self, product: SampleProduct) -> None:
        await self._conn.execute(
            """
            UPDATE sample_product
            SET name = %s, code = %s, description = %s, is_active = %s, updated_at = %s
            WHERE id = %s AND deleted_at IS NULL
            """,
            (
                product.name,
                product.code,
                product.description,
                product.is_active,
                product.updated_at,
                product.id,
            ),
        )

    async def soft_delete(self, product_id: UUID) -> None:
        await self._conn.execute(
            "UPDATE sample_product SET deleted_at = %s WHERE id = %s AND deleted_at IS NULL",
            (datetime.now(UTC), product_id),
        )

    async def restore(self, product_id: UUID) -> None:
        await self._conn.execute(
            "UPDATE sample_product SET deleted_at = NULL, updated_at = %s WHERE id = %s",
            (datetime.now(UTC), product_id),
        )
