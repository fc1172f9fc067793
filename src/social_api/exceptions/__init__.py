# social_api/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── kinds.py                   # ErrorKind + Failure (tagged result of a rejected operation)
# │   ├── classification.py          # ErrorKind -> (HTTP status, caller-safe message)
# │   ├── base.py                    # Raised app-level errors (RepositoryError, StorageError)
# │   ├── integrity_classifier.py    # SQL-level / DB-specific fault classification
# │   └── mapper.py                  # Map DB errors to app-level errors, exceptions to Failures

from .kinds import ErrorKind, Failure
from .classification import Classification, classify, classify_kind
from .base import (
    RepositoryError,
    StorageError,
)

__all__ = [
    "ErrorKind",
    "Failure",
    "Classification",
    "classify",
    "classify_kind",
    "RepositoryError",
    "StorageError",
]
