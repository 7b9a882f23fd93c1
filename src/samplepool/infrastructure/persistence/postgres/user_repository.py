"""PostgreSQL user repository implementation."""

from __future__ import annotations

from uuid import UUID

from psycopg import AsyncConnection

from samplepool.domain.entities import User
from samplepool.infrastructure.persistence.postgres.role_repository import (
    ROLE_COLUMNS,
    load_role_permissions,
    role_from_row,
)

USER_COLUMNS = "u.id, u.name, u.email, u.password_hash, u.is_active, u.created_at, u.updated_at"


def user_from_row(r: tuple) -> User:
    return User(
        id=r[0],
        name=r[1],
        email=r[2],
        password_hash=r[3],
        is_active=r[4],
        created_at=r[5],
        updated_at=r[6],
    )


class PostgresUserRepository:
    """User repository implementation. Users come back with live roles and their permissions."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def _with_roles(self, users: list[User]) -> list[User]:
        if not users:
            return users
        cur = await self._conn.execute(
            f"""
            SELECT ur.user_id, {ROLE_COLUMNS}
            FROM user_role ur
            JOIN role r ON r.id = ur.role_id
            WHERE ur.user_id = ANY(%s) AND r.deleted_at IS NULL
            ORDER BY r.name
            """,
            ([u.id for u in users],),
        )
        rows = await cur.fetchall()
        roles = {}
        links = []
        for row in rows:
            role = roles.setdefault(row[1], role_from_row(row[1:]))
            links.append((row[0], role))
        by_role = await load_role_permissions(self._conn, list(roles))
        for role in roles.values():
            role.permissions = by_role.get(role.id, [])
        by_user = {u.id: u for u in users}
        for user_id, role in links:
            by_user[user_id].roles.append(role)
        return users

    async def _fetch(self, where: str, params: tuple = ()) -> list[User]:
        cur = await self._conn.execute(
            f"SELECT {USER_COLUMNS} FROM app_user u {where} ORDER BY u.created_at", params
        )
        users = [user_from_row(r) for r in await cur.fetchall()]
        return await self._with_roles(users)

    async def get_by_id(self, user_id: UUID) -> User | None:
        users = await self._fetch("WHERE u.id = %s", (user_id,))
        return users[0] if users else None

    async def get_by_email(self, email: str) -> User | None:
        users = await self._fetch("WHERE lower(u.email) = lower(%s)", (email,))
        return users[0] if users else None

    async def list(self) -> list[User]:
        return await self._fetch("")

    async def create(self, user: User) -> User:
        await self._conn.execute(
            """
            INSERT INTO app_user (id, name, email, password_hash, is_active, created_at, updated_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            """,
            (
                user.id,
                user.name,
                user.email,
                user.password_hash,
                user.is_active,
                user.created_at,
                user.updated_at,
            ),
        )
        return user

    async def update(self, user: User) -> None:
        await self._conn.execute(
            "UPDATE app_user SET name = %s, email = %s, is_active = %s, updated_at = %s WHERE id = %s",
            (user.name, user.email, user.is_active, user.updated_at, user.id),
        )

    async def set_roles(self, user_id: UUID, role_ids: list[UUID]) -> None:
        """Replace the user's role links."""
        await self._conn.execute("DELETE FROM user_role WHERE user_id = %s", (user_id,))
        for role_id in dict.fromkeys(role_ids):
            await self._conn.execute(
                "INSERT INTO user_role (user_id, role_id) VALUES (%s, %s)",
                (user_id, role_id),
            )

    async def delete(self, user_id: UUID) -> None:
        await self._conn.execute("DELETE FROM app_user WHERE id = %s", (user_id,))
