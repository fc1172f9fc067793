import logging
from enum import Enum
from typing import Type

from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)

from .base import StorageError
from .kinds import ErrorKind

logger = logging.getLogger(__name__)

# =================================================================================================================
# Storage fault exceptions
# =================================================================================================================


class ConstraintViolationError(StorageError):
    """Base for integrity/constraint violations."""
    kind = ErrorKind.STORAGE_CONSTRAINT


class UniqueConstraintError(ConstraintViolationError):
    """Unique constraint / duplicate value."""
    kind = ErrorKind.STORAGE_DUPLICATE_KEY


class NotNullConstraintError(ConstraintViolationError):
    """NOT NULL violation (missing required field)."""


class ForeignKeyConstraintError(ConstraintViolationError):
    """Foreign key constraint violated."""


class CheckConstraintError(ConstraintViolationError):
    """CHECK constraint violated."""


class UnknownIntegrityError(ConstraintViolationError):
    """Unrecognized integrity error."""


class LockNotAvailableError(StorageError):
    kind = ErrorKind.STORAGE_LOCK


class DeadlockError(StorageError):
    kind = ErrorKind.STORAGE_DEADLOCK


class QueryTimeoutError(StorageError):
    kind = ErrorKind.STORAGE_TIMEOUT


class PermissionDeniedError(StorageError):
    kind = ErrorKind.STORAGE_PERMISSION


# =================================================================================================================
# Postgres error code mapping
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"
    DEADLOCK_DETECTED = "40P01"
    LOCK_NOT_AVAILABLE = "55P03"
    QUERY_CANCELED = "57014"
    INSUFFICIENT_PRIVILEGE = "42501"


PGCODE_EXCEPTION_MAP: dict[str, Type[StorageError]] = {
    PostgresErrorCodes.UNIQUE_VIOLATION: UniqueConstraintError,
    PostgresErrorCodes.NOT_NULL_VIOLATION: NotNullConstraintError,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION: ForeignKeyConstraintError,
    PostgresErrorCodes.CHECK_VIOLATION: CheckConstraintError,
    PostgresErrorCodes.DEADLOCK_DETECTED: DeadlockError,
    PostgresErrorCodes.LOCK_NOT_AVAILABLE: LockNotAvailableError,
    PostgresErrorCodes.QUERY_CANCELED: QueryTimeoutError,
    PostgresErrorCodes.INSUFFICIENT_PRIVILEGE: PermissionDeniedError,
}


# =================================================================================================================
# Classifiers
# =================================================================================================================

def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


def _pgcode(orig) -> str | None:
    # psycopg2 exposes `pgcode`, psycopg3 and the asyncpg adapter expose `sqlstate`
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    return code if isinstance(code, str) else None


def _classify_from_postgres_diag(orig) -> tuple[Type[StorageError] | None, str | None]:
    """
    Classify a Postgres error based on its SQLSTATE code and diagnostics.
    """
    pgcode = _pgcode(orig)
    if not pgcode:
        return None, None

    diag = getattr(orig, "diag", None)
    constraint_name = getattr(diag, "constraint_name", None) if diag else None
    if constraint_name is None:
        constraint_name = getattr(orig, "constraint_name", None)

    exception_class = PGCODE_EXCEPTION_MAP.get(pgcode)

    if exception_class:
        logger.debug("Postgres storage diagnostic",
                     extra={"pgcode": pgcode, "constraint_name": constraint_name})
        return exception_class, constraint_name

    logger.warning(
        "Unknown Postgres error code encountered",
        extra={"pgcode": pgcode, "constraint_name": constraint_name}
    )
    logger.debug("Postgres orig diagnostic (raw)", extra={"orig_repr": repr(orig)})

    return None, constraint_name


def _classify_integrity_message(msg: str) -> Type[ConstraintViolationError]:
    """
    Classify integrity error based on message content (fallback for SQLite, MySQL, etc).
    """
    normalized = msg.lower()

    if _match_any(normalized, ["unique constraint", "unique failed", "unique violation", "duplicate"]):
        return UniqueConstraintError

    if _match_any(normalized, ["not null constraint", "not null", "null value in column"]):
        return NotNullConstraintError

    if _match_any(normalized, ["foreign key constraint", "foreign key", "is not present in table"]):
        return ForeignKeyConstraintError

    if _match_any(normalized, ["check constraint", "check failed"]):
        return CheckConstraintError

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": (msg or "")[:200]})
    logger.debug("Unknown integrity raw message", extra={"raw": msg})
    return UnknownIntegrityError


def _classify_operational_message(msg: str) -> Type[StorageError]:
    """
    Classify non-integrity driver errors from their wording (SQLite, MySQL, generic drivers).
    """
    normalized = msg.lower()

    if _match_any(normalized, ["deadlock"]):
        return DeadlockError

    if _match_any(normalized, ["database is locked", "lock wait timeout", "could not obtain lock", "lock not available"]):
        return LockNotAvailableError

    if _match_any(normalized, ["timeout", "timed out", "canceling statement"]):
        return QueryTimeoutError

    if _match_any(normalized, ["permission denied", "access denied", "insufficient privilege", "readonly database"]):
        return PermissionDeniedError

    return StorageError


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolationError], str | None]:
    """
    Heuristically classify a SQLAlchemy IntegrityError into a specific ConstraintViolationError subclass.

    Returns:
        A tuple of (ExceptionClass, constraint_name if available)
    """
    orig = exc.orig

    exception_class, constraint_name = _classify_from_postgres_diag(orig)
    if exception_class is not None and issubclass(exception_class, ConstraintViolationError):
        return exception_class, constraint_name

    return _classify_integrity_message(str(orig) if orig is not None else str(exc)), constraint_name


def classify_storage_error(exc: SQLAlchemyError) -> tuple[Type[StorageError], str | None]:
    """
    Classify any SQLAlchemy error into a StorageError subclass.

    Order: integrity errors, pool timeouts, Postgres SQLSTATE codes, message heuristics.
    Anything unrecognized is a plain StorageError (generic storage fault).
    """
    if isinstance(exc, IntegrityError):
        return classify_integrity_error(exc)

    if isinstance(exc, PoolTimeoutError):
        return QueryTimeoutError, None

    orig = exc.orig if isinstance(exc, DBAPIError) else None

    exception_class, constraint_name = _classify_from_postgres_diag(orig)
    if exception_class is not None:
        return exception_class, constraint_name

    msg = str(orig) if orig is not None else str(exc)
    return _classify_operational_message(msg), constraint_name


def classify_storage_kind(exc: SQLAlchemyError) -> ErrorKind:
    """Return only the ErrorKind for a SQLAlchemy error."""
    exception_class, _ = classify_storage_error(exc)
    return exception_class.kind
