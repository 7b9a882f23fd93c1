"""Lifespan middleware - ties the database pool to the ASGI server lifetime."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Open the pool on startup, failing fast if the database is unreachable; close it on shutdown."""

    def __init__(self, pool: AsyncConnectionPool, open_timeout: float = 30.0) -> None:
        self._pool = pool
        self._open_timeout = open_timeout

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open(wait=True, timeout=self._open_timeout)
        logger.info(
            "Database pool %s opened (min=%d, max=%d)",
            self._pool.name, self._pool.min_size, self._pool.max_size,
        )

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        logger.info("Database pool %s closed", self._pool.name)
