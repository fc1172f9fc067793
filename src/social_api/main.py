"""
Main entrypoint for the Social Media API.

`create_app()` assembles the FastAPI application: logging, request-id middleware, exception
handlers and routes. The database engine is created in the lifespan (not at import time) and
kept on `app.state`, so every app instance, including the ones tests build, owns its engine.

    uvicorn social_api.main:app --reload
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.v1 import register_exception_handlers, router as v1_router
from .api.v1.error_handlers import unexpected_error_handler
from .config.settings import Settings, get_settings
from .core.logging import RequestIDMiddleware, setup_logging
from .database.base import Base
from .database.session import build_engine, build_sessionmaker
from .utils.logging import get_project_version

from . import models  # noqa: F401  register models with Base.metadata

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, *, configure_logging: bool = True) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to run with; defaults to `get_settings()` (environment / .env).
        configure_logging: apply the dictConfig logging setup. Tests turn this off so pytest's
            own capture handlers stay installed.
    """
    settings = settings or get_settings()

    if configure_logging:
        setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = build_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = build_sessionmaker(engine)

        if settings.CREATE_SCHEMA_ON_STARTUP:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        logger.info(
            "app.startup",
            extra={"env": settings.ENV, "database": engine.url.render_as_string(hide_password=True)},
        )
        try:
            yield
        finally:
            await engine.dispose()
            logger.info("app.shutdown")

    app = FastAPI(
        title="Social Media API",
        version=get_project_version(),
        lifespan=lifespan,
    )
    app.state.settings = settings

    # unhandled errors are rendered inside the middleware, while the request id is still set
    app.add_middleware(RequestIDMiddleware, on_error=unexpected_error_handler)
    register_exception_handlers(app)
    app.include_router(v1_router)

    return app


app = create_app()
