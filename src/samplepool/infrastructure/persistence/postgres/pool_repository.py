"""PostgreSQL pool repository implementation."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID

from psycopg import AsyncConnection

from samplepool.domain.entities import Pool
from samplepool.domain.value_objects import PoolStatus

COLUMNS = (
    "p.id, p.name, p.sample_source, p.batch_number, p.description, p.category_id, "
    "p.user_id, p.pool_price, p.amount_received, p.total_contributors, p.status, "
    "p.is_active, p.is_approved, p.created_at, p.updated_at, p.deleted_at"
)


def _from_row(r: tuple) -> Pool:
    return Pool(
        id=r[0],
        name=r[1],
        sample_source=r[2],
        batch_number=r[3],
        description=r[4],
        category_id=r[5],
        user_id=r[6],
        pool_price=r[7],
        amount_received=r[8],
        total_contributors=r[9],
        status=PoolStatus(r[10]),
        is_active=r[11],
        is_approved=r[12],
        created_at=r[13],
        updated_at=r[14],
        deleted_at=r[15],
    )


class PostgresPoolRepository:
    """Pool repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(
        self, pool_id: UUID, include_deleted: bool = False, for_update: bool = False
    ) -> Pool | None:
        sql = f"SELECT {COLUMNS} FROM pool p WHERE p.id = %s"
        if not include_deleted:
            sql += " AND p.deleted_at IS NULL"
        if for_update:
            # serializes read-modify-write against credit()
            sql += " FOR UPDATE"
        cur = await self._conn.execute(sql, (pool_id,))
        r = await cur.fetchone()
        return _from_row(r) if r else None

    async def get_by_batch(self, batch_number: str, category_id: UUID) -> Pool | None:
        cur = await self._conn.execute(
            f"SELECT {COLUMNS} FROM pool p "
            "WHERE p.batch_number = %s AND p.category_id = %s AND p.deleted_at IS NULL",
            (batch_number, category_id),
        )
        r = await cur.fetchone()
        return _from_row(r) if r else None

    async def list(
        self,
        *,
        user_id: UUID | None = None,
        include_inactive: bool = False,
        include_deleted: bool = False,
        include_unapproved: bool = False,
    ) -> list[Pool]:
        conditions: list[str] = []
        params: list = []
        if user_id is not None:
            conditions.append("p.user_id = %s")
            params.append(user_id)
        if not include_deleted:
            conditions.append("p.deleted_at IS NULL")
        if not include_inactive:
            conditions.append("p.is_active")
        if not include_unapproved:
            conditions.append("p.is_approved")
        sql = f"SELECT {COLUMNS} FROM pool p"
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        sql += " ORDER BY p.created_at DESC"
        cur = await self._conn.execute(sql, params)
        return [_from_row(r) for r in await cur.fetchall()]

    async def create(self, pool: Pool) -> Pool:
        await self._conn.execute(
            """
            INSERT INTO pool (id, name, sample_source, batch_number, description, category_id,
                              user_id, pool_price, amount_received, total_contributors, status,
                              is_active, is_approved, created_at, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            """,
            (
                pool.id,
                pool.name,
                pool.sample_source,
                pool.batch_number,
                pool.description,
                pool.category_id,
                pool.user_id,
                pool.pool_price,
                pool.amount_received,
                pool.total_contributors,
                pool.status.value,
                pool.is_active,
                pool.is_approved,
                pool.created_at,
                pool.updated_at,
            ),
        )
        return pool

    async def update(self, pool: Pool) -> None:
        """Persist editable fields. amount_received and total_contributors change only via credit."""
        await self._conn.execute(
            """
            UPDATE pool
            SET name = %s, sample_source = %s, batch_number = %s, description = %s,
                category_id = %s, pool_price = %s, status = %s, is_active = %s,
                is_approved = %s, updated_at = %s
            WHERE id = %s AND deleted_at IS NULL
            """,
            (
                pool.name,
                pool.sample_source,
                pool.batch_number,
                pool.description,
                pool.category_id,
                pool.pool_price,
                pool.status.value,
                pool.is_active,
                pool.is_approved,
                pool.updated_at,
                pool.id,
            ),
        )

    async def credit(self, pool_id: UUID, amount: Decimal) -> tuple[Pool, bool] | None:
        cur = await self._conn.execute(
            f"""
            WITH prev AS (
                SELECT id, status FROM pool WHERE id = %(id)s FOR UPDATE
            )
            UPDATE pool p
            SET amount_received = p.amount_received + %(amount)s,
                total_contributors = p.total_contributors + 1,
                status = CASE
                    WHEN p.pool_price IS NOT NULL
                         AND p.amount_received + %(amount)s >= p.pool_price
                         AND p.status IN (%(created)s, %(funding)s)
                    THEN %(reached)s
                    ELSE p.status
                END,
                updated_at = %(now)s
            FROM prev
            WHERE p.id = prev.id
            RETURNING {COLUMNS}, prev.status
            """,
            {
                "id": pool_id,
                "amount": amount,
                "created": PoolStatus.CREATED.value,
                "funding": PoolStatus.FUNDING.value,
                "reached": PoolStatus.TARGET_REACHED.value,
                "now": datetime.now(UTC),
            },
        )
        r = await cur.fetchone()
        if not r:
            return None
        pool = _from_row(r[:-1])
        reached_now = (
            pool.status is PoolStatus.TARGET_REACHED and r[-1] != PoolStatus.TARGET_REACHED.value
        )
        return pool, reached_now

    async def soft_delete(self, pool_id: UUID) -> None:
        await self._conn.execute(
            "UPDATE pool SET deleted_at = %s WHERE id = %s AND deleted_at IS NULL",
            (datetime.now(UTC), pool_id),
        )

    async def hard_delete(self, pool_id: UUID) -> None:
        await self._conn.execute("DELETE FROM pool WHERE id = %s", (pool_id,))

    async def restore(self, pool_id: UUID) -> None:
        await self._conn.execute(
            "UPDATE pool SET deleted_at = NULL, updated_at = %s WHERE id = %s",
            (datetime.now(UTC), pool_id),
        )
