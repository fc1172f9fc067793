"""
Engine and session factory construction.

Nothing here is created at import time: `create_app()` builds the engine inside the lifespan and
stores it (with its sessionmaker) on `app.state`, so tests can point the app at their own database.
"""
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ..config.settings import Settings


def _is_sqlite(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def _is_in_memory_sqlite(url: str) -> bool:
    database = make_url(url).database
    return _is_sqlite(url) and database in (None, "", ":memory:")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY clauses (and ON DELETE CASCADE) unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings_or_url: Settings | str, *, echo: bool | None = None) -> AsyncEngine:
    """
    Create the AsyncEngine for a Settings object or a plain database URL.

    - Postgres: pool_pre_ping for connection health checks.
    - SQLite: foreign keys switched on for every connection.
    - In-memory SQLite: a single shared connection (StaticPool), otherwise each
      connection would see its own empty database.
    """
    if isinstance(settings_or_url, Settings):
        url = settings_or_url.DATABASE_URL
        echo = settings_or_url.SQLALCHEMY_ECHO if echo is None else echo
    else:
        url = settings_or_url
    echo = bool(echo)

    if _is_in_memory_sqlite(url):
        engine = create_async_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    elif _is_sqlite(url):
        engine = create_async_engine(url, echo=echo)
    else:
        engine = create_async_engine(
            url,
            echo=echo,
            pool_pre_ping=True,  # Enables connection health checks
        )

    if _is_sqlite(url):
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: entities stay readable after the service commits
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# Dependency to get DB session
async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session and ensures it's closed after the request.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    sessionmaker: async_sessionmaker[AsyncSession] = request.app.state.sessionmaker
    async with sessionmaker() as session:
        yield session
