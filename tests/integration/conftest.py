"""
Shared fixtures for PostgreSQL integration tests.

Tests using the pool fixture are skipped when DATABASE_URL does not
point at a reachable PostgreSQL server.
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from onboarding.adapters.repository.postgres import run_migrations
from onboarding.config.settings import get_settings


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool and schema for integration tests."""
    settings = get_settings()
    pool = ConnectionPool(conninfo=settings.database_url, min_size=1, max_size=10, open=True)
    try:
        pool.wait(timeout=3)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL is not reachable")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty the customer and token tables before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM confirm_tokens")
        conn.execute("DELETE FROM customers")
    yield
