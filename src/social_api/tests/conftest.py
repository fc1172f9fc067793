"""
Core pytest configuration for the entire test suite.

Only the database setup needed by ALL kinds of tests lives here. Domain fixtures are in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/service_fixtures.py
- tests/test_fixtures/api_fixtures.py

and are imported at the bottom of this module so every test can use them without imports.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging
import os
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time, before anything initializes
# them, to keep pytest collection quiet (Faker, SQLAlchemy, ...).
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from social_api import models  # noqa: F401  import to register models with Base.metadata
from social_api.database.base import Base
from social_api.database.session import build_engine, build_sessionmaker

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------------------------
# Test database URL
# ------------------------------------------------------------------------------------------------

def get_test_database_url() -> str:
    """
    1. `TEST_DATABASE_URL` environment variable (CI override, e.g. a Postgres service)
    2. otherwise a private in-memory SQLite database per test
    """
    return os.getenv("TEST_DATABASE_URL") or "sqlite+aiosqlite://"


TEST_DATABASE_URL = get_test_database_url()
logger.info("Using test DB: %s", make_url(TEST_DATABASE_URL).render_as_string(hide_password=True))


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------

@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh engine and schema for every test. Function scope keeps the engine on the same
    event loop as the test (pytest-asyncio gives each test its own loop).
    """
    engine = build_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Factory for extra sessions (e.g. to simulate a second, concurrent request)."""
    return build_sessionmaker(async_engine)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """
    The session under test. Services commit through it; the per-test database is thrown
    away afterwards, so no SAVEPOINT juggling is needed.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


# Repository test fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402
    faker,
    account_repository,
    message_repository,
    base_repo,
    account_data,
    create_account,
    created_account,
    multiple_accounts,
    create_message,
    created_message,
)

# Service test fixtures
from .test_fixtures.service_fixtures import (  # noqa: E402
    test_logger,
    account_service,
    message_service,
)

# API test fixtures
from .test_fixtures.api_fixtures import (  # noqa: E402
    api_settings,
    app,
    client,
)
