"""Fixtures for HTTP tests: an app bound to a private in-memory database."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from social_api.config.settings import Settings
from social_api.main import create_app


@pytest.fixture
def api_settings() -> Settings:
    # _env_file=None: ignore any developer .env; Postgres explicitly off
    return Settings(
        _env_file=None,
        ENV="testing",
        POSTGRES_HOST=None,
        POSTGRES_DB=None,
        SQLITE_URL="sqlite+aiosqlite://",
        CREATE_SCHEMA_ON_STARTUP=True,
        ACCOUNT_WRITE_ISOLATION_LEVEL="SERIALIZABLE",
    )


@pytest.fixture
def app(api_settings: Settings) -> FastAPI:
    return create_app(api_settings, configure_logging=False)


@pytest.fixture
def client(app: FastAPI):
    """
    TestClient used as a context manager so the lifespan runs (engine + schema).
    Server errors are returned as responses, not re-raised, so 500 bodies can be asserted.
    """
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
