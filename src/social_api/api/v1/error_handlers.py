# social_api/api/v1/error_handlers.py
"""
Turn failures and exceptions into HTTP responses.

- Routes render a returned `Failure` with `failure_response()`.
- Raised errors reach the handlers registered by `register_exception_handlers()`.

Every error response has the same body: {"status": int, "message": str, "timestamp": ISO-8601}.
The status and message always come from the pure `classify()`, so storage faults never leak
driver text to clients.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ...exceptions.base import RepositoryError
from ...exceptions.classification import classify
from ...exceptions.kinds import ErrorKind, Failure
from ...exceptions.mapper import failure_from_exception
from ...schemas.common import ErrorBody

logger = logging.getLogger(__name__)


def error_body(failure: Failure | ErrorKind) -> ErrorBody:
    status, message = classify(failure)
    return ErrorBody(status=status, message=message, timestamp=datetime.now(timezone.utc))


def failure_response(failure: Failure) -> JSONResponse:
    body = error_body(failure)
    return JSONResponse(status_code=body.status, content=jsonable_encoder(body))


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """
    Raised repository/storage errors (StorageError subclasses).
    The raw detail was already logged by the mapper; log the request context only.
    """
    failure = exc.to_failure()
    log = logger.warning if failure.kind.is_storage else logger.info
    log(
        "http.repository_error",
        extra={"method": request.method, "path": request.url.path, "kind": failure.kind.value},
    )
    return failure_response(failure)


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """A raw SQLAlchemy error that escaped `db_error_handler`: classify it the same way."""
    failure = failure_from_exception(exc)
    logger.error(
        "http.unmapped_storage_error",
        extra={"method": request.method, "path": request.url.path, "kind": failure.kind.value},
        exc_info=exc,
    )
    return failure_response(failure)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Body/path values pydantic could not parse (e.g. `postedBy: "abc"`, `/messages/abc`) are
    invalid input, not 422s.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"Invalid value for {location}: {first.get('msg', 'invalid input')}." if location \
        else "Request body could not be parsed."

    logger.info(
        "http.request_validation_failed",
        extra={"method": request.method, "path": request.url.path, "errors": len(errors)},
    )
    return failure_response(Failure(ErrorKind.INVALID_INPUT, message, (location,) if location else None))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else: 500 with the generic message, full stack trace in the logs."""
    logger.exception(
        "http.unexpected_error",
        extra={"method": request.method, "path": request.url.path},
    )
    return failure_response(failure_from_exception(exc))


# Helper to register all handlers on an app (call this from the app factory)
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
