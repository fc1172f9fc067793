"""
Raised exceptions for repository/storage operations.

Expected client mistakes travel as `Failure` values (see kinds.py). The classes here are for
faults that unwind the stack, which are raised by the storage layer.
"""

from typing import Iterable

from .classification import classify_kind
from .kinds import ErrorKind, Failure

# canonical repository-level exception

class RepositoryError(Exception):
    """
    Base exception for repository/storage errors.

    - message: human-friendly message (logged; returned to clients only for non-storage kinds)
    - fields: optional list of field names related to the error (e.g., ['username'])
    - constraint: optional DB constraint name or identifier (for logs only)
    - kind: the ErrorKind driving HTTP classification
    """

    kind: ErrorKind = ErrorKind.STORAGE_GENERIC

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, kind: ErrorKind | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        parts.append(f"kind: {self.kind.value}")
        return f"{base} ({'; '.join(parts)})"

    def to_failure(self) -> Failure:
        """Return the tagged value equivalent of this exception."""
        return Failure(self.kind, self.message, tuple(self.fields) if self.fields else None)

    def http_status(self) -> int:
        return int(classify_kind(self.kind).status)


class StorageError(RepositoryError):
    """
    A fault surfaced by the database (lock, timeout, permission, constraint, ...).

    The message is safe for logs but is never returned to clients: the classification table
    supplies a fixed message for every storage kind.
    """

    kind = ErrorKind.STORAGE_GENERIC


__all__ = [
    "RepositoryError",
    "StorageError",
]
