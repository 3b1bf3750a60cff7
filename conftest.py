"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path
from typing import Dict, Optional

import asyncpg
import pytest

# Load env vars
from dotenv import load_dotenv
load_dotenv()

from db.client import create_pool, close_pool
from db.config import DatabaseConfig


# =============================================================================
# SAFETY CHECK: Prevent tests from running against production database
# =============================================================================

ALLOWED_DB_HOSTS = {"localhost", "127.0.0.1", "host.docker.internal", "db", "postgres"}

# Integration tests create and drop this schema
TEST_SCHEMA = "hotels_test"

SCHEMA_SQL = Path(__file__).parent / "db" / "schema.sql"


def _db_configured() -> bool:
    return bool(os.getenv("DATABASE_URL") or os.getenv("HOTELS_DB_HOST"))


def pytest_configure(config):
    """Register custom markers and check database safety."""
    config.addinivalue_line("markers", "integration: mark test as integration test (needs PostgreSQL)")

    if not _db_configured():
        return

    db_host = DatabaseConfig.from_env().host

    if db_host not in ALLOWED_DB_HOSTS:
        pytest.exit(
            f"\n\n"
            f"{'=' * 60}\n"
            f"SAFETY CHECK FAILED: Cannot run tests against production DB!\n"
            f"{'=' * 60}\n"
            f"\n"
            f"Current database host: {db_host}\n"
            f"Allowed hosts: {', '.join(sorted(ALLOWED_DB_HOSTS))}\n"
            f"\n"
            f"To run tests, set HOTELS_DB_HOST to 'localhost' in your .env\n"
            f"{'=' * 60}\n",
            returncode=1,
        )


# =============================================================================
# Fixtures
# =============================================================================

async def _connect(config: DatabaseConfig) -> asyncpg.Connection:
    return await asyncpg.connect(
        host=config.host,
        port=config.port,
        database=config.database,
        user=config.user,
        password=config.password,
    )


@pytest.fixture
async def db_pool():
    """Connection pool on a throwaway schema holding the wp_* tables.

    Skips the test when no database is configured.
    """
    if not _db_configured():
        pytest.skip("No test database configured (set HOTELS_DB_HOST or DATABASE_URL)")

    config = DatabaseConfig.from_env().model_copy(update={"search_path": TEST_SCHEMA})

    admin = await _connect(config)
    try:
        await admin.execute(f"DROP SCHEMA IF EXISTS {TEST_SCHEMA} CASCADE")
        await admin.execute(f"CREATE SCHEMA {TEST_SCHEMA}")
        await admin.execute(f"SET search_path TO {TEST_SCHEMA}")
        await admin.execute(SCHEMA_SQL.read_text())
    finally:
        await admin.close()

    pool = await create_pool(config)
    yield pool
    await close_pool(pool)

    admin = await _connect(config)
    try:
        await admin.execute(f"DROP SCHEMA IF EXISTS {TEST_SCHEMA} CASCADE")
    finally:
        await admin.close()


class Seeder:
    """Inserts hotels, rooms and reviews into the test schema."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def hotel(self, name: str, meta: Optional[Dict[str, str]] = None) -> int:
        async with self.pool.acquire() as conn:
            hotel_id = await conn.fetchval(
                "INSERT INTO wp_users (user_login, display_name) VALUES ($1, $1) RETURNING id",
                name,
            )
            for key, value in (meta or {}).items():
                await conn.execute(
                    "INSERT INTO wp_usermeta (user_id, meta_key, meta_value) VALUES ($1, $2, $3)",
                    hotel_id, key, value,
                )
        return hotel_id

    async def _post(self, hotel_id: int, title: str, post_type: str, meta: Dict[str, str]) -> int:
        async with self.pool.acquire() as conn:
            post_id = await conn.fetchval(
                "INSERT INTO wp_posts (post_author, post_title, post_type) VALUES ($1, $2, $3) RETURNING id",
                hotel_id, title, post_type,
            )
            for key, value in meta.items():
                await conn.execute(
                    "INSERT INTO wp_postmeta (post_id, meta_key, meta_value) VALUES ($1, $2, $3)",
                    post_id, key, value,
                )
        return post_id

    async def room(
        self,
        hotel_id: int,
        title: str,
        price: str,
        surface: str = "20",
        bedrooms: str = "1",
        bathrooms: str = "1",
        type: str = "double",
    ) -> int:
        return await self._post(hotel_id, title, "room", {
            "price": price,
            "surface": surface,
            "bedrooms_count": bedrooms,
            "bathrooms_count": bathrooms,
            "type": type,
        })

    async def review(self, hotel_id: int, rating: str) -> int:
        return await self._post(hotel_id, "Review", "review", {"rating": rating})


@pytest.fixture
def seed(db_pool) -> Seeder:
    return Seeder(db_pool)
