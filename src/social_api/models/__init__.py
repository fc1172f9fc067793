r"""
Centralized access to the database models.

Importing this package registers every model with `Base.metadata`, which `create_all()` and
the test fixtures rely on.

    from social_api.models import Account, Message
"""

from .account import Account
from .message import Message

__all__ = [
    "Account",
    "Message",
]
