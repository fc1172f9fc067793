"""
Map SQL-level / DB-specific errors to app-level errors.

Two directions live here:

- `raise_mapped_storage_error()` / `db_error_handler()`: a raw SQLAlchemy error becomes a
  `StorageError` subclass with a sanitized message. The raw driver text only goes to DEBUG logs.
- `failure_from_exception()`: any exception becomes a `Failure`, so the HTTP boundary can run
  the pure `classify()` over it.
"""
import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    classify_storage_error,
    ConstraintViolationError,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
    CheckConstraintError,
)
from .base import RepositoryError, StorageError
from .classification import GENERIC_UNEXPECTED_MESSAGE
from .kinds import ErrorKind, Failure

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_postgres(msg: str) -> list[str] | None:
    """
    Try to extract involved column names from common Postgres messages:
      - 'null value in column "username" violates not-null constraint'
      - 'DETAIL:  Key (username)=(alice) already exists.'
    """
    if not msg:
        return None

    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    return None


def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # SQLite: 'UNIQUE constraint failed: accounts.username'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', msg, flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]
    return None


def _extract_columns_mysql(msg: str) -> list[str] | None:
    # MySQL-ish: "Duplicate entry 'foo' for key 'uq_accounts_username'"
    m = re.search(r"Duplicate entry .* for key '?([^']+)'?", msg, flags=re.IGNORECASE)
    if m:
        return [m.group(1)]
    return None


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of column names from the DB message (Postgres, SQLite, MySQL).
    """
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)

    for extractor in (_extract_columns_postgres, _extract_columns_sqlite, _extract_columns_mysql):
        cols = extractor(msg)
        if cols:
            return cols
    return None


# -----------------------
# Mapper
# -----------------------

def _raw_message(exc: SQLAlchemyError) -> str:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def raise_mapped_storage_error(exc: SQLAlchemyError, model_name: str | None = None) -> None:
    """
    Map a SQLAlchemy error to a StorageError subclass and raise it.
    Populates `.fields` and `.constraint` where possible.
    """
    exc_cls, constraint_name = classify_storage_error(exc)
    columns = extract_columns_from_integrity(exc) if isinstance(exc, IntegrityError) else None
    model_part = model_name or "Record"

    if exc_cls is UniqueConstraintError:
        # expected client-level scenario (409), INFO is enough
        logger.info(
            "mapper.duplicate_detected",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        raise UniqueConstraintError(
            f"{model_part} already exists", fields=columns, constraint=constraint_name
        ) from exc

    if exc_cls is ForeignKeyConstraintError:
        logger.info(
            "mapper.foreign_key_violation",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        raise ForeignKeyConstraintError(
            f"{model_part} referenced entity not found", fields=columns, constraint=constraint_name
        ) from exc

    if exc_cls is NotNullConstraintError:
        logger.info(
            "mapper.not_null_violation",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        raise NotNullConstraintError(
            f"Missing required field for {model_part}", fields=columns, constraint=constraint_name
        ) from exc

    if exc_cls is CheckConstraintError:
        logger.debug(
            "mapper.check_constraint_failure",
            extra={"model": model_part, "raw": _raw_message(exc), "constraint": constraint_name},
        )
        raise CheckConstraintError(
            f"{model_part} business rule violated (check constraint).", constraint=constraint_name
        ) from exc

    if issubclass(exc_cls, ConstraintViolationError):
        logger.warning(
            "mapper.unknown_integrity_error",
            extra={"model": model_part, "constraint": constraint_name},
        )
        logger.debug("mapper.unknown_integrity_raw", extra={"model": model_part, "raw": _raw_message(exc)})
        raise exc_cls(f"{model_part} database integrity error.", constraint=constraint_name) from exc

    # lock / deadlock / timeout / permission are transient or operator issues: WARNING
    if exc_cls is not StorageError:
        logger.warning(
            "mapper.storage_fault",
            extra={"model": model_part, "kind": exc_cls.kind.value, "constraint": constraint_name},
        )
        logger.debug("mapper.storage_fault_raw", extra={"model": model_part, "raw": _raw_message(exc)})
        raise exc_cls(f"{model_part} storage fault ({exc_cls.kind.value}).", constraint=constraint_name) from exc

    # unclassified: full stack trace for diagnostics, generic message for callers
    logger.error(
        "mapper.unclassified_storage_error",
        extra={"model": model_part, "raw": _raw_message(exc)},
        exc_info=exc,
    )
    raise StorageError(f"Failed to operate on {model_part}") from exc


# -----------------------
# Async context manager to DRY error handling in repositories and services
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model.__name__):
            ... DB ops that may raise SQLAlchemy errors ...
    This will rollback on error and raise a mapped StorageError.
    RepositoryError raised inside the block passes through untouched.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        try:
            await db.rollback()
        except Exception:
            logger.exception("Failed to rollback session after storage error", extra={"model": model_name})
        raise_mapped_storage_error(exc, model_name)


# -----------------------
# Exception -> Failure (for the HTTP boundary)
# -----------------------

def failure_from_exception(exc: BaseException) -> Failure:
    """
    Convert any exception into a Failure.

    - RepositoryError (incl. StorageError): its own kind and message
    - raw SQLAlchemyError that escaped the repositories: classified storage kind
    - anything else: UNEXPECTED with the generic message (never the exception text)
    """
    if isinstance(exc, RepositoryError):
        return exc.to_failure()
    if isinstance(exc, SQLAlchemyError):
        exc_cls, _ = classify_storage_error(exc)
        return Failure(exc_cls.kind, "Storage fault")
    return Failure(ErrorKind.UNEXPECTED, GENERIC_UNEXPECTED_MESSAGE)
