"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    timeout: float = 30.0,
) -> AsyncConnectionPool:
    """Build the shared pool, closed.

    PoolLifespanMiddleware opens it on ASGI startup. Connections are checked
    before being handed out so a restarted database does not surface as 500s.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        name="samplepool",
        check=AsyncConnectionPool.check_connection,
        open=False,
    )
