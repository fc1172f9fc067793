"""
Custom logging formatters.

  - JsonFormatter: structured JSON logs for log collectors. Includes service, env, version
    and request_id, plus every `extra={...}` key (non-serializable values become strings).
  - ColorFormatter: compact ANSI-colored lines for local development consoles.

The builder picks one per handler from `settings.LOG_FORMAT` (see builder.py).

Formatters emit whatever is passed in `extra`; secrets are scrubbed earlier by RedactFilter.
"""

import json
import logging
from logging import LogRecord
from typing import Any

from ...utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

DEFAULT_SERVICE_NAME = "social-api"

# attributes every LogRecord has; anything else on the record came from `extra`
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Construction:
      - env: environment name (e.g. "development" | "production"); optional.
      - service: logical service name to include in logs.
      - datefmt: optional date format passed to logging.Formatter (used by formatTime).
    """

    def __init__(self, *, env: str | None = None, service: str = DEFAULT_SERVICE_NAME, datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in log_record or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, ValueError):
                log_record[key] = str(value)

        # default=str is the last line of defence: format() must never raise
        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Development-friendly colored formatter:
    TIMESTAMP | LEVEL | LOGGER_NAME | REQUEST_ID | MESSAGE [extras]
    """

    COLOR_CODES = {
        "DEBUG": "\033[36m",      # cyan
        "INFO": "\033[32m",       # green
        "WARNING": "\033[33m",    # yellow
        "ERROR": "\033[31m",      # red
        "CRITICAL": "\033[1;41m", # bold, red background
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        base = (
            f"{timestamp} | {color}{record.levelname:<8}{reset} | "
            f"{record.name:<30} | "
            f"{getattr(record, 'request_id', '-'):<10} | "
            f"{record.getMessage()}"
        )

        # event-style messages carry their detail in extras; show them inline
        extras = {
            k: v for k, v in record.__dict__.items()
            if k not in _RESERVED_ATTRS and k != "request_id" and not k.startswith("_")
        }
        if extras:
            base += " " + " ".join(f"{k}={v!r}" for k, v in sorted(extras.items()))

        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)
        return base
