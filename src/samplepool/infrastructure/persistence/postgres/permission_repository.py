"""PostgreSQL permission repository implementation."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID

from psycopg import AsyncConnection

from samplepool.domain.entities import Permission

PERMISSION_COLUMNS = (
    "p.id, p.name, p.resource, p.action, p.description, p.is_active, "
    "p.created_at, p.updated_at, p.deleted_at"
)


def permission_from_row(r: tuple) -> Permission:
    return Permission(
        id=r[0],
        name=r[1],
        resource=r[2],
        action=r[3],
        description=r[4],
        is_active=r[5],
        created_at=r[6],
        updated_at=r[7],
        deleted_at=r[8],
    )


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: UUID, include_deleted: bool = False) -> Permission | None:
        sql = f"SELECT {PERMISSION_COLUMNS} FROM permission p WHERE p.id = %s"
        if not include_deleted:
            sql += " AND p.deleted_at IS NULL"
        cur = await self._conn.execute(sql, (permission_id,))
        r = await cur.fetchone()
        return permission_from_row(r) if r else None

    async def get_by_name(self, name: str) -> Permission | None:
        cur = await self._conn.execute(
            f"SELECT {PERMISSION_COLUMNS} FROM permission p "
            "WHERE p.name = %s AND p.deleted_at IS NULL",
            (name,),
        )
        r = await cur.fetchone()
        return permission_from_row(r) if r else None

    async def get_many(self, permission_ids: list[UUID]) -> list[Permission]:
        """Live permissions among permission_ids."""
        if not permission_ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {PERMISSION_COLUMNS} FROM permission p "
            "WHERE p.id = ANY(%s) AND p.deleted_at IS NULL",
            (list(permission_ids),),
        )
        return [permission_from_row(r) for r in await cur.fetchall()]

    async def list(self, include_deleted: bool = False) -> list[Permission]:
        sql = f"SELECT {PERMISSION_COLUMNS} FROM permission p"
        if not include_deleted:
            sql += " WHERE p.deleted_at IS NULL"
        sql += " ORDER BY p.resource, p.action"
        cur = await self._conn.execute(sql)
        return [permission_from_row(r) for r in await cur.fetchall()]

    async def list_by_resource(self, resource: str) -> list[Permission]:
        cur = await self._conn.execute(
            f"SELECT {PERMISSION_COLUMNS} FROM permission p "
            "WHERE p.resource = %s AND p.is_active AND p.deleted_at IS NULL "
            "ORDER BY p.action",
            (resource,),
        )
        return [permission_from_row(r) for r in await cur.fetchall()]

    async def create(self, permission: Permission) -> Permission:
        await self._conn.execute(
            """
            INSERT INTO permission (id, name, resource, action, description, is_active,
                                    created_at, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            """,
            (
                permission.id,
                permission.name,
                permission.resource,
                permission.action,
                permission.description,
                permission.is_active,
                permission.created_at,
                permission.updated_at,
            ),
        )
        return permission

    async def update(self, permission: Permission) -> None:
        await self._conn.execute(
            """
            UPDATE permission
            SET name = %s, resource = %s, action = %s, description = %s,
                is_active = %s, updated_at = %s
            WHERE id = %s AND deleted_at IS NULL
            """,
            (
                permission.name,
                permission.resource,
                permission.action,
                permission.description,
                permission.is_active,
                permission.updated_at,
                permission.id,
            ),
        )

    async def soft_delete(self, permission_id: UUID) -> None:
        await self._conn.execute(
            "UPDATE permission SET deleted_at = %s WHERE id = %s AND deleted_at IS NULL",
            (datetime.now(UTC), permission_id),
        )

    async def restore(self, permission_id: UUID) -> None:
        await self._conn.execute(
            "UPDATE permission SET deleted_at = NULL, updated_at = %s WHERE id = %s",
            (datetime.now(UTC), permission_id),
        )
