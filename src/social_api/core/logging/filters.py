"""
Logging filters

Request ID filter and helpers for logging, plus a redaction filter.

- `RequestIdFilter` makes sure every LogRecord has a `request_id` attribute, so formatters
  referencing `%(request_id)s` never KeyError. The id lives in a `contextvars.ContextVar`,
  set per request by `RequestIDMiddleware`; a ContextVar (unlike threading.local()) follows
  the request across awaits.
- `RedactFilter` masks credentials passed through `extra={...}`. Account payloads carry a
  plain `password`; it must never reach a handler.

When no request id is set (startup code, tests, CLI), records get the sentinel "-".
"""

import contextvars
import logging
from logging import LogRecord
from typing import Any

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)

REDACTED = "***REDACTED***"


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    """
    Reset the contextvar to the previously saved token returned by set_request_id().
    """
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantees every LogRecord has a `request_id` attribute.

    Priority: an explicit `extra={"request_id": ...}`, then the contextvar, then "-".
    Always returns True: it annotates, it never drops.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    """
    Replace sensitive attributes on the record (and sensitive keys of dict-valued extras,
    e.g. `extra={"payload": {"username": "a", "password": "b"}}`) with REDACTED.
    """

    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization"}

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                k: (REDACTED if isinstance(k, str) and k.lower() in self.SENSITIVE else self._scrub(v))
                for k, v in value.items()
            }
        return value

    def filter(self, record: LogRecord) -> bool:
        for key, value in list(record.__dict__.items()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = REDACTED
            elif isinstance(value, dict):
                record.__dict__[key] = self._scrub(value)
        return True
