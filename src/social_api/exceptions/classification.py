"""
Error classification: the single, total mapping from `ErrorKind` to an HTTP status and a
caller-safe message.

`classify()` is a pure function. It never logs and never inspects exception internals. Callers
that hold an exception first turn it into a `Failure` (see `mapper.failure_from_exception`).
"""

from dataclasses import dataclass
from http import HTTPStatus

from .kinds import ErrorKind, Failure


@dataclass(frozen=True)
class Classification:
    """
    status: HTTP status code
    message: fixed caller-safe message, or None when the failure's own message may be returned
    """

    status: int
    message: str | None = None


GENERIC_UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again later."

CLASSIFICATIONS: dict[ErrorKind, Classification] = {
    ErrorKind.RECORD_MISSING: Classification(HTTPStatus.NOT_FOUND),
    ErrorKind.REQUEST_REJECTED: Classification(HTTPStatus.BAD_REQUEST),
    ErrorKind.INVALID_INPUT: Classification(HTTPStatus.BAD_REQUEST),
    ErrorKind.AUTHENTICATION_FAILED: Classification(HTTPStatus.UNAUTHORIZED),
    ErrorKind.DUPLICATE_RESOURCE: Classification(HTTPStatus.CONFLICT),
    ErrorKind.REFERENCE_NOT_FOUND: Classification(HTTPStatus.BAD_REQUEST),
    ErrorKind.DATA_INTEGRITY: Classification(HTTPStatus.UNPROCESSABLE_ENTITY),
    ErrorKind.STORAGE_CONSTRAINT: Classification(
        HTTPStatus.CONFLICT, "Database constraint violation occurred"
    ),
    ErrorKind.STORAGE_DUPLICATE_KEY: Classification(
        HTTPStatus.CONFLICT, "A record with this identifier already exists"
    ),
    ErrorKind.STORAGE_LOCK: Classification(
        HTTPStatus.CONFLICT, "Database resource is currently locked"
    ),
    ErrorKind.STORAGE_DEADLOCK: Classification(
        HTTPStatus.CONFLICT, "A database deadlock was detected"
    ),
    ErrorKind.STORAGE_TIMEOUT: Classification(
        HTTPStatus.REQUEST_TIMEOUT, "The database query timed out"
    ),
    ErrorKind.STORAGE_PERMISSION: Classification(
        HTTPStatus.FORBIDDEN, "Insufficient database permissions for this operation"
    ),
    ErrorKind.STORAGE_GENERIC: Classification(
        HTTPStatus.INTERNAL_SERVER_ERROR, "A database error occurred"
    ),
    ErrorKind.UNEXPECTED: Classification(
        HTTPStatus.INTERNAL_SERVER_ERROR, GENERIC_UNEXPECTED_MESSAGE
    ),
}


def classify_kind(kind: ErrorKind) -> Classification:
    """Return the classification for `kind`; unknown kinds fall back to UNEXPECTED."""
    return CLASSIFICATIONS.get(kind, CLASSIFICATIONS[ErrorKind.UNEXPECTED])


def classify(error: Failure | ErrorKind) -> tuple[int, str]:
    """
    Map a failure (or a bare kind) to `(status_code, message)`.

    Fixed messages always win, so storage faults never echo driver text. For caller-derived
    kinds the failure's own message is used; a bare kind falls back to the HTTP reason phrase.
    """
    if isinstance(error, Failure):
        kind, own_message = error.kind, error.message
    else:
        kind, own_message = error, None

    classification = classify_kind(kind)
    status = int(classification.status)

    if classification.message is not None:
        return status, classification.message
    if own_message:
        return status, own_message
    return status, HTTPStatus(status).phrase


__all__ = [
    "Classification",
    "CLASSIFICATIONS",
    "GENERIC_UNEXPECTED_MESSAGE",
    "classify",
    "classify_kind",
]
