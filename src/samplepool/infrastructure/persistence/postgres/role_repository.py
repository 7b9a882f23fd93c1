"""PostgreSQL role repository implementation."""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime
from uuid import UUID

from psycopg import AsyncConnection

from samplepool.domain.entities import Permission, Role
from samplepool.infrastructure.persistence.postgres.permission_repository import (
    PERMISSION_COLUMNS,
    permission_from_row,
)

ROLE_COLUMNS = "r.id, r.name, r.description, r.is_active, r.created_at, r.updated_at, r.deleted_at"


def role_from_row(r: tuple) -> Role:
    return Role(
        id=r[0],
        name=r[1],
        description=r[2],
        is_active=r[3],
        created_at=r[4],
        updated_at=r[5],
        deleted_at=r[6],
    )


async def load_role_permissions(
    conn: AsyncConnection, role_ids: list[UUID]
) -> dict[UUID, list[Permission]]:
    """Live permissions per role id."""
    result: dict[UUID, list[Permission]] = defaultdict(list)
    if not role_ids:
        return result
    cur = await conn.execute(
        f"""
        SELECT rp.role_id, {PERMISSION_COLUMNS}
        FROM role_permission rp
        JOIN permission p ON p.id = rp.permission_id
        WHERE rp.role_id = ANY(%s) AND p.deleted_at IS NULL
        ORDER BY p.resource, p.action
        """,
        (list(role_ids),),
    )
    for row in await cur.fetchall():
        result[row[0]].append(permission_from_row(row[1:]))
    return result


class PostgresRoleRepository:
    """Role repository implementation. Roles come back with their permissions."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def _with_permissions(self, roles: list[Role]) -> list[Role]:
        by_role = await load_role_permissions(self._conn, [r.id for r in roles])
        for role in roles:
            role.permissions = by_role.get(role.id, [])
        return roles

    async def _fetch(self, where: str, params: tuple = ()) -> list[Role]:
        cur = await self._conn.execute(
            f"SELECT {ROLE_COLUMNS} FROM role r {where} ORDER BY r.name", params
        )
        roles = [role_from_row(r) for r in await cur.fetchall()]
        return await self._with_permissions(roles)

    async def get_by_id(self, role_id: UUID, include_deleted: bool = False) -> Role | None:
        where = "WHERE r.id = %s" + ("" if include_deleted else " AND r.deleted_at IS NULL")
        roles = await self._fetch(where, (role_id,))
        return roles[0] if roles else None

    async def get_by_name(self, name: str) -> Role | None:
        roles = await self._fetch("WHERE r.name = %s AND r.deleted_at IS NULL", (name,))
        return roles[0] if roles else None

    async def get_many(self, role_ids: list[UUID]) -> list[Role]:
        if not role_ids:
            return []
        return await self._fetch(
            "WHERE r.id = ANY(%s) AND r.deleted_at IS NULL", (list(role_ids),)
        )

    async def list(self, include_deleted: bool = False) -> list[Role]:
        return await self._fetch("" if include_deleted else "WHERE r.deleted_at IS NULL")

    async def create(self, role: Role) -> Role:
        await self._conn.execute(
            """
            INSERT INTO role (id, name, description, is_active, created_at, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s)
            """,
            (role.id, role.name, role.description, role.is_active, role.created_at, role.updated_at),
        )
        return role

    async def update(self, role: Role) -> None:
        await self._conn.execute(
            """
            UPDATE role SET name = %s, description = %s, is_active = %s, updated_at = %s
            WHERE id = %s AND deleted_at IS NULL
            """,
            (role.name, role.description, role.is_active, role.updated_at, role.id),
        )

    async def set_permissions(self, role_id: UUID, permission_ids: list[UUID]) -> None:
        """Replace the role's permission links."""
        await self._conn.execute("DELETE FROM role_permission WHERE role_id = %s", (role_id,))
        for permission_id in dict.fromkeys(permission_ids):
            await self._conn.execute(
                "INSERT INTO role_permission (role_id, permission_id) VALUES (%s, %s)",
                (role_id, permission_id),
            )

    async def soft_delete(self, role_id: UUID) -> None:
        await self._conn.execute(
            "UPDATE role SET deleted_at = %s WHERE id = %s AND deleted_at IS NULL",
            (datetime.now(UTC), role_id),
        )

    async def restore(self, role_id: UUID) -> None:
        await self._conn.execute(
            "UPDATE role SET deleted_at = NULL, updated_at = %s WHERE id = %s",
            (datetime.now(UTC), role_id),
        )
