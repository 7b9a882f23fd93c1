"""PostgreSQL donation repository implementation."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID

from psycopg import AsyncConnection

from samplepool.domain.entities import Donation
from samplepool.domain.value_objects import DonationStatus

COLUMNS = (
    "id, pool_id, user_id, amount, status, message, anonymous_donor_name, "
    "anonymous_donor_email, anonymous_donor_phone, payment_order_id, payment_id, "
    "payment_signature, created_at, updated_at"
)


def _from_row(r: tuple) -> Donation:
    return Donation(
        id=r[0],
        pool_id=r[1],
        user_id=r[2],
        amount=r[3],
        status=DonationStatus(r[4]),
        message=r[5],
        anonymous_donor_name=r[6],
        anonymous_donor_email=r[7],
        anonymous_donor_phone=r[8],
        payment_order_id=r[9],
        payment_id=r[10],
        payment_signature=r[11],
        created_at=r[12],
        updated_at=r[13],
    )


class PostgresDonationRepository:
    """Donation repository implementation.

    Status changes are conditional on the row still being Pending, so a
    donation leaves Pending at most once even under concurrent callbacks.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, donation_id: UUID) -> Donation | None:
        cur = await self._conn.execute(
            f"SELECT {COLUMNS} FROM donation WHERE id = %s", (donation_id,)
        )
        r = await cur.fetchone()
        return _from_row(r) if r else None

    async def get_by_order_id(self, order_id: str) -> Donation | None:
        cur = await self._conn.execute(
            f"SELECT {COLUMNS} FROM donation WHERE payment_order_id = %s", (order_id,)
        )
        r = await cur.fetchone()
        return _from_row(r) if r else None

    async def list(
        self,
        *,
        pool_id: UUID | None = None,
        user_id: UUID | None = None,
        status: DonationStatus | None = None,
    ) -> list[Donation]:
        conditions: list[str] = []
        params: list = []
        if pool_id is not None:
            conditions.append("pool_id = %s")
            params.append(pool_id)
        if user_id is not None:
            conditions.append("user_id = %s")
            params.append(user_id)
        if status is not None:
            conditions.append("status = %s")
            params.append(status.value)
        sql = f"SELECT {COLUMNS} FROM donation"
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        cur = await self._conn.execute(sql + " ORDER BY created_at DESC", params)
        return [_from_row(r) for r in await cur.fetchall()]

    async def create(self, donation: Donation) -> Donation:
        await self._conn.execute(
            """
            INSERT INTO donation (id, pool_id, user_id, amount, status, message,
                                  anonymous_donor_name, anonymous_donor_email,
                                  anonymous_donor_phone, payment_order_id,
                                  created_at, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            """,
            (
                donation.id,
                donation.pool_id,
                donation.user_id,
                donation.amount,
                donation.status.value,
                donation.message,
                donation.anonymous_donor_name,
                donation.anonymous_donor_email,
                donation.anonymous_donor_phone,
                donation.payment_order_id,
                donation.created_at,
                donation.updated_at,
            ),
        )
        return donation

    async def mark_succeeded(
        self, donation_id: UUID, payment_id: str, signature: str
    ) -> Donation | None:
        cur = await self._conn.execute(
            f"""
            UPDATE donation
            SET status = %s, payment_id = %s, payment_signature = %s, updated_at = %s
            WHERE id = %s AND status = %s
            RETURNING {COLUMNS}
            """,
            (
                DonationStatus.SUCCESS.value,
                payment_id,
                signature,
                datetime.now(UTC),
                donation_id,
                DonationStatus.PENDING.value,
            ),
        )
        r = await cur.fetchone()
        return _from_row(r) if r else None

    async def mark_failed(self, donation_id: UUID) -> Donation | None:
        cur = await self._conn.execute(
            f"""
            UPDATE donation SET status = %s, updated_at = %s
            WHERE id = %s AND status = %s
            RETURNING {COLUMNS}
            """,
            (
                DonationStatus.FAILED.value,
                datetime.now(UTC),
                donation_id,
                DonationStatus.PENDING.value,
            ),
        )
        r = await cur.fetchone()
        return _from_row(r) if r else None
