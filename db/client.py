from pathlib import Path
from contextlib import asynccontextmanager
import asyncpg
import aiosql

from db.config import DatabaseConfig

# Load queries from SQL files
queries = aiosql.from_path(
    Path(__file__).parent / "queries",
    "asyncpg",
)


async def create_pool(config: DatabaseConfig) -> asyncpg.Pool:
    """Create a connection pool. The caller owns it and must close it."""

    async def _init_connection(conn):
        await conn.execute(f"SET search_path TO {config.quoted_search_path}")

    return await asyncpg.create_pool(
        host=config.host,
        port=config.port,
        database=config.database,
        user=config.user,
        password=config.password,
        min_size=config.min_size,
        max_size=config.max_size,
        command_timeout=config.command_timeout,
        init=_init_connection,
    )


@asynccontextmanager
async def get_conn(pool: asyncpg.Pool):
    """Get connection from pool (recommended pattern from asyncpg docs)."""
    async with pool.acquire() as conn:
        yield conn


async def close_pool(pool: asyncpg.Pool) -> None:
    """Gracefully close all connections."""
    await pool.close()
