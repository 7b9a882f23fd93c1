"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from samplepool.infrastructure.persistence.postgres.donation_repository import (
    PostgresDonationRepository,
)
from samplepool.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from samplepool.infrastructure.persistence.postgres.pool_repository import (
    PostgresPoolRepository,
)
from samplepool.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from samplepool.infrastructure.persistence.postgres.sample_product_repository import (
    PostgresSampleProductRepository,
)
from samplepool.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._users = PostgresUserRepository(self._conn)
        self._roles = PostgresRoleRepository(self._conn)
        self._permissions = PostgresPermissionRepository(self._conn)
        self._sample_products = PostgresSampleProductRepository(self._conn)
        self._pools = PostgresPoolRepository(self._conn)
        self._donations = PostgresDonationRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    @property
    def sample_products(self) -> PostgresSampleProductRepository:
        return self._sample_products

    @property
    def pools(self) -> PostgresPoolRepository:
        return self._pools

    @property
    def donations(self) -> PostgresDonationRepository:
        return self._donations

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Commits when the block exits normally, rolls back on exception. Work
    committed explicitly inside the block stays committed.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
