"""
Error kinds and the `Failure` value returned by the validation layer.

Validation and business-rule checks never raise for expected client mistakes. They return a
`Failure` carrying one `ErrorKind` and a human-friendly message. The HTTP boundary turns that
kind into a status code (see `classification.classify`).

Storage kinds (`STORAGE_*`) describe faults that come from the database driver. Those are raised
as `StorageError` subclasses by the repository layer and carry no caller-visible detail.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    # business-rule / validation kinds (message is caller-derived and safe to return)
    RECORD_MISSING = "record_missing"
    # a missing record the caller named in a write request (update/delete): a rejection, not a 404
    REQUEST_REJECTED = "request_rejected"
    INVALID_INPUT = "invalid_input"
    AUTHENTICATION_FAILED = "authentication_failed"
    DUPLICATE_RESOURCE = "duplicate_resource"
    REFERENCE_NOT_FOUND = "reference_not_found"
    DATA_INTEGRITY = "data_integrity"

    # storage-originated kinds (message is fixed, raw driver text is only logged)
    STORAGE_CONSTRAINT = "storage_constraint"
    STORAGE_DUPLICATE_KEY = "storage_duplicate_key"
    STORAGE_LOCK = "storage_lock"
    STORAGE_DEADLOCK = "storage_deadlock"
    STORAGE_TIMEOUT = "storage_timeout"
    STORAGE_PERMISSION = "storage_permission"
    STORAGE_GENERIC = "storage_generic"

    # catch-all
    UNEXPECTED = "unexpected"

    @property
    def is_storage(self) -> bool:
        return self.value.startswith("storage_")


@dataclass(frozen=True)
class Failure:
    """
    Tagged result of a rejected operation.

    - kind: the stable error kind used for HTTP classification
    - message: human-friendly reason naming the failing field or record
    - fields: optional field names involved (e.g. ("username",))
    """

    kind: ErrorKind
    message: str
    fields: tuple[str, ...] | None = None

    def __str__(self) -> str:
        if self.fields:
            return f"{self.message} (fields: {', '.join(self.fields)}; kind: {self.kind.value})"
        return f"{self.message} (kind: {self.kind.value})"


__all__ = ["ErrorKind", "Failure"]
