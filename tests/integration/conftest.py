import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio

from docsync.config.settings import Settings
from docsync.database.connection import close_pool, get_connection, init_pool
from docsync.database.schema import ensure_schema

INTEGRATION_USER = "integration-user"


@pytest.fixture(scope="session")
def integration_user() -> str:
    return INTEGRATION_USER


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docsync_test")
    return Settings(db_connect_timeout_seconds=3.0)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest_asyncio.fixture
async def integration_pool(test_settings: Settings) -> AsyncGenerator[None, None]:
    try:
        await init_pool(test_settings)
    except Exception as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run these tests")
    try:
        await ensure_schema()
        yield
    finally:
        await close_pool()


@pytest_asyncio.fixture
async def integration_cleanup(integration_pool: None) -> AsyncGenerator[None, None]:
    yield
    async with get_connection() as conn:
        await conn.execute("DELETE FROM documents WHERE user_id = %s", (INTEGRATION_USER,))
        await conn.commit()
