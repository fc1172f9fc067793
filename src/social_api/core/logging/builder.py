# social_api/core/logging/builder.py
"""
Logging builder: create and apply a dictConfig logging configuration.

    setup_logging(settings)

- `make_dict_config(settings)` builds the mapping: formatters (standard/color and json),
  filters (request_id, redact), handlers (see handlers.py) and loggers (root, uvicorn,
  sqlalchemy.engine).
- `setup_logging(settings)` creates LOG_DIR when file logging is on and applies the mapping.

Settings are passed in, never read from `get_settings()` here, so importing this module has no
side effects and tests can build configs from throwaway Settings objects.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from ...config.settings import Settings
from ...utils.logging import get_project_name
from .filters import RedactFilter, RequestIdFilter
from .formatters import DEFAULT_SERVICE_NAME, ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"


def file_logging_enabled(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.
    """
    formatters = {
        "standard": {
            # ColorFormatter only in text development mode
            "()": ColorFormatter if (settings.LOG_FORMAT == "text" and settings.ENV == "development") else logging.Formatter,
            "format": TEXT_FORMAT,
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(default=DEFAULT_SERVICE_NAME),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    # We always include "console" (stderr)
    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if file_logging_enabled(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            # SQL logging may contain credentials in bound parameters: off unless asked for
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging from settings.

    Steps:
      1. Ensure LOG_DIR exists when writing files.
      2. Apply dictConfig(make_dict_config(settings)).
      3. Register a RequestIdFilter on the root logger as a safety net, so records logged
         straight to root-level handlers added later still carry `request_id`.
    """
    if file_logging_enabled(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    root = logging.getLogger()
    if not any(isinstance(f, RequestIdFilter) for f in root.filters):
        root.addFilter(RequestIdFilter())
